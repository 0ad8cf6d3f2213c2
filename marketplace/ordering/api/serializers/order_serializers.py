from rest_framework import serializers

from marketplace.catalog.api.serializers.repo_serializers import CodeRepoSerializer
from marketplace.ordering.domain.models import Order, UserRepoAccess


class OrderSerializer(serializers.ModelSerializer):
    repo_name = serializers.CharField(source="code_repo.name", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user",
            "code_repo",
            "repo_name",
            "status",
            "total_amount",
            "stripe_payment_intent_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserRepoAccessSerializer(serializers.ModelSerializer):
    code_repo = CodeRepoSerializer(read_only=True)

    class Meta:
        model = UserRepoAccess
        fields = ["id", "code_repo", "order", "granted_at", "expires_at"]
        read_only_fields = fields
