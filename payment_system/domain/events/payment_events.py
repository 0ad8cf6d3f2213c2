from dataclasses import dataclass
from decimal import Decimal

from infrastructure.events import DomainEvent


@dataclass
class OrderPaidEvent(DomainEvent):
    """Event: Payment confirmed and order recorded."""

    def __init__(self, order_id: str, user_id: str, seller_id: str, repo_id: str, amount: Decimal, currency: str):
        super().__init__(
            event_type="order.paid",
            payload={
                "order_id": order_id,
                "user_id": user_id,
                "seller_id": seller_id,
                "repo_id": repo_id,
                "amount": str(amount),
                "currency": currency,
            },
        )


@dataclass
class PayoutRequestedEvent(DomainEvent):
    """Event: Seller asked for a payout."""

    def __init__(self, payout_request_id: str, seller_id: str, amount: Decimal):
        super().__init__(
            event_type="payout.requested",
            payload={"payout_request_id": payout_request_id, "seller_id": seller_id, "amount": str(amount)},
        )


@dataclass
class PayoutProcessedEvent(DomainEvent):
    """Event: Admin approved or rejected a payout request."""

    def __init__(self, payout_request_id: str, seller_id: str, status: str, payout_id: str = None):
        super().__init__(
            event_type="payout.processed",
            payload={
                "payout_request_id": payout_request_id,
                "seller_id": seller_id,
                "status": status,
                "payout_id": payout_id,
            },
        )
