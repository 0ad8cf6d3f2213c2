from .payout import Payout, PayoutRequest
from .sales import SalesAggregate


__all__ = [
    "SalesAggregate",
    "PayoutRequest",
    "Payout",
]
