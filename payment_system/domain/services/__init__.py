from .checkout_service import CheckoutService
from .payout_request_service import PayoutRequestService
from .payout_service import PayoutService
from .sales_service import SalesService


__all__ = [
    "CheckoutService",
    "PayoutRequestService",
    "PayoutService",
    "SalesService",
]
