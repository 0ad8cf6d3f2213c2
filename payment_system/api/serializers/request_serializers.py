from decimal import Decimal

from rest_framework import serializers

from payment_system.domain.models import PayoutRequest


class CheckoutRequestSerializer(serializers.Serializer):
    repo_id = serializers.UUIDField(required=True, help_text="Repository to purchase")


class PayoutRequestCreateSerializer(serializers.Serializer):
    total_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.01"), help_text="Amount to withdraw"
    )


class PayoutRequestUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PayoutRequest.STATUS_CHOICES, help_text="New request status")


class PayoutProcessRequestSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["approve", "reject"], help_text="Admin decision")
    note = serializers.CharField(required=False, allow_blank=True, default="", help_text="Optional note to the seller")


class SellerEarningsQuerySerializer(serializers.Serializer):
    seller_id = serializers.UUIDField(required=True)
    start = serializers.DateTimeField(required=True)
    end = serializers.DateTimeField(required=True)

    def validate(self, attrs):
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError("start must be before end")
        return attrs
