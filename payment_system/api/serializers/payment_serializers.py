from rest_framework import serializers

from payment_system.domain.models import Payout, PayoutRequest


class PayoutRequestSerializer(serializers.ModelSerializer):
    seller_id = serializers.UUIDField(source="seller_profile.user_id", read_only=True)
    business_name = serializers.CharField(source="seller_profile.business_name", read_only=True)

    class Meta:
        model = PayoutRequest
        fields = [
            "id",
            "seller_profile",
            "seller_id",
            "business_name",
            "total_amount",
            "status",
            "last_payout_date",
            "processed_at",
            "processed_by",
            "admin_note",
            "created_at",
        ]
        read_only_fields = fields


class PayoutSerializer(serializers.ModelSerializer):
    payout_request_id = serializers.UUIDField(source="payout_request.id", read_only=True, allow_null=True)

    class Meta:
        model = Payout
        fields = [
            "id",
            "payout_request_id",
            "total_amount",
            "currency",
            "status",
            "stripe_payout_id",
            "failure_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
