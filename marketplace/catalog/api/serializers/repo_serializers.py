from decimal import Decimal

from rest_framework import serializers

from marketplace.catalog.api.serializers.user_serializers import MinimalUserSerializer
from marketplace.catalog.domain.models import CodeRepo


class CodeRepoSerializer(serializers.ModelSerializer):
    """Listing representation; never includes source."""

    user = MinimalUserSerializer(read_only=True)
    tags = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")

    class Meta:
        model = CodeRepo
        fields = [
            "id",
            "user",
            "name",
            "description",
            "language",
            "price",
            "visibility",
            "status",
            "tags",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CodeRepoOwnerSerializer(CodeRepoSerializer):
    """Owner / admin representation including source."""

    class Meta(CodeRepoSerializer.Meta):
        fields = CodeRepoSerializer.Meta.fields + ["source_js", "source_css", "stripe_product_id", "stripe_price_id"]
        read_only_fields = fields


class CodeRepoWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    language = serializers.ChoiceField(choices=CodeRepo.LANGUAGE_CHOICES, default=CodeRepo.LANGUAGE_JSX)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"))
    source_js = serializers.CharField(required=False, allow_blank=True, default="")
    source_css = serializers.CharField(required=False, allow_blank=True, default="")
    visibility = serializers.ChoiceField(choices=CodeRepo.VISIBILITY_CHOICES, default=CodeRepo.VISIBILITY_PUBLIC)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)


class RepoStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CodeRepo.STATUS_CHOICES)


class SearchParamsSerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    tags = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    language = serializers.CharField(required=False, allow_blank=True)
    visibility = serializers.CharField(required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    page_size = serializers.IntegerField(min_value=1, max_value=100, required=False, default=20)
