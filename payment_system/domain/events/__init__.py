from .payment_events import OrderPaidEvent, PayoutProcessedEvent, PayoutRequestedEvent


__all__ = [
    "OrderPaidEvent",
    "PayoutRequestedEvent",
    "PayoutProcessedEvent",
]
