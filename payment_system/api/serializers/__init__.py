from .payment_serializers import PayoutRequestSerializer, PayoutSerializer
from .request_serializers import (
    CheckoutRequestSerializer,
    PayoutProcessRequestSerializer,
    PayoutRequestCreateSerializer,
    PayoutRequestUpdateSerializer,
    SellerEarningsQuerySerializer,
)
from .response_serializers import (
    BalanceResponseSerializer,
    CheckoutResponseSerializer,
    PaginatedPayoutRequestsResponseSerializer,
    PaginatedPayoutsResponseSerializer,
    PaymentIntentResponseSerializer,
    PayoutRequestDetailResponseSerializer,
    SellerEarningsResponseSerializer,
)


__all__ = [
    "PayoutRequestSerializer",
    "PayoutSerializer",
    "CheckoutRequestSerializer",
    "PayoutProcessRequestSerializer",
    "PayoutRequestCreateSerializer",
    "PayoutRequestUpdateSerializer",
    "SellerEarningsQuerySerializer",
    "BalanceResponseSerializer",
    "CheckoutResponseSerializer",
    "PaginatedPayoutRequestsResponseSerializer",
    "PaginatedPayoutsResponseSerializer",
    "PaymentIntentResponseSerializer",
    "PayoutRequestDetailResponseSerializer",
    "SellerEarningsResponseSerializer",
]
