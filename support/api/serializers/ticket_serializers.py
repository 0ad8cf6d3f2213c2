from rest_framework import serializers

from support.domain.models import SupportTicket


class SupportTicketSerializer(serializers.ModelSerializer):
    class Meta:
        model = SupportTicket
        fields = ["id", "email", "title", "content", "status", "type", "created_at", "updated_at"]
        read_only_fields = fields


class SupportTicketCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    title = serializers.CharField(max_length=200)
    content = serializers.CharField()
    type = serializers.ChoiceField(choices=SupportTicket.TYPE_CHOICES, required=False)

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title cannot be blank")
        return value


class SupportTicketStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SupportTicket.STATUS_CHOICES)


class TicketPageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()


class PaginatedTicketsSerializer(serializers.Serializer):
    data = SupportTicketSerializer(many=True)
    meta = TicketPageMetaSerializer()
