from payment_system.domain.models import Payout, PayoutRequest, SalesAggregate


__all__ = ["SalesAggregate", "PayoutRequest", "Payout"]
