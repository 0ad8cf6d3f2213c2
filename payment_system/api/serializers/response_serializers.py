"""
Response Serializers for API Documentation

Used by drf-spectacular only; views build these payloads directly.
"""

from rest_framework import serializers

from authentication.api.serializers.seller_serializers import BankAccountSerializer, SellerProfileSerializer
from marketplace.ordering.api.serializers import OrderSerializer

from .payment_serializers import PayoutRequestSerializer, PayoutSerializer


class CheckoutResponseSerializer(serializers.Serializer):
    client_secret = serializers.CharField(help_text="Secret used by the frontend to confirm the payment")
    payment_intent_id = serializers.CharField()


class PaymentIntentResponseSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField()
    status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()


class BalanceResponseSerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    last_payout_request_date = serializers.DateTimeField(allow_null=True)
    currency = serializers.CharField()
    minimum_payout_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class LimitPageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()


class PaginatedPayoutRequestsResponseSerializer(serializers.Serializer):
    data = PayoutRequestSerializer(many=True)
    meta = LimitPageMetaSerializer()


class PaginatedPayoutsResponseSerializer(serializers.Serializer):
    data = PayoutSerializer(many=True)
    meta = LimitPageMetaSerializer()


class PayoutRequestDetailResponseSerializer(serializers.Serializer):
    payout_request = PayoutRequestSerializer()
    seller_profile = SellerProfileSerializer()
    bank_account = BankAccountSerializer(allow_null=True)
    orders = OrderSerializer(many=True)


class SellerEarningsResponseSerializer(serializers.Serializer):
    seller_id = serializers.UUIDField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    payout_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    platform_fee_percent = serializers.IntegerField()
