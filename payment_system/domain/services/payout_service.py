"""
PayoutService - Sending approved payouts and payout reporting.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from django.conf import settings
from django.db.models import Sum

from infrastructure.payments.interface import PaymentException
from marketplace.ordering.domain.models import Order
from payment_system.domain.models import Payout
from payment_system.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def platform_fee_rate() -> Decimal:
    return Decimal(str(getattr(settings, "PLATFORM_FEE_PERCENT", 10))) / 100


class PayoutService(BaseService):
    def __init__(self, payment_provider):
        super().__init__()
        self.payment_provider = payment_provider

    @BaseService.log_performance
    def execute_payout(self, payout: Payout) -> ServiceResult[Payout]:
        """
        Send a PENDING (or previously FAILED) payout to the seller's
        connected account.

        Provider failures mark the payout FAILED and are re-raised so the
        calling task can retry.
        """
        if payout.status not in (Payout.STATUS_PENDING, Payout.STATUS_FAILED):
            return service_err(ErrorCodes.INVALID_STATE, f"Payout {payout.id} is already {payout.status}")

        profile = payout.seller_profile
        if not profile.stripe_account_id:
            # Transfers only go to connected accounts; a stored bank account alone is not enough
            if hasattr(profile, "bank_account"):
                reason = "Seller bank account is not linked to a connected account"
            else:
                reason = "Seller has no connected account or bank account"
            payout.status = Payout.STATUS_FAILED
            payout.failure_reason = reason
            payout.save(update_fields=["status", "failure_reason", "updated_at"])
            return service_err(ErrorCodes.NO_PAYOUT_DESTINATION, reason)

        try:
            transfer = self.payment_provider.create_transfer(
                amount=payout.total_amount,
                currency=payout.currency,
                destination_account=profile.stripe_account_id,
                metadata={"payout_id": str(payout.id), "seller_profile_id": str(profile.id)},
            )
        except PaymentException as e:
            payout.status = Payout.STATUS_FAILED
            payout.failure_reason = str(e)
            payout.save(update_fields=["status", "failure_reason", "updated_at"])
            metrics.payout_volume_total.labels(currency=payout.currency, status="failed").inc(
                float(payout.total_amount)
            )
            self.logger.error(f"Transfer for payout {payout.id} failed: {e}")
            raise

        payout.status = Payout.STATUS_PROCESSING
        payout.stripe_payout_id = transfer.transfer_id
        payout.failure_reason = ""
        payout.save(update_fields=["status", "stripe_payout_id", "failure_reason", "updated_at"])
        metrics.payout_volume_total.labels(currency=payout.currency, status="sent").inc(float(payout.total_amount))
        return service_ok(payout)

    def calculate_payout_amount(self, seller, start: datetime, end: datetime) -> Decimal:
        """Seller earnings for the period after the platform fee."""
        gross = Order.objects.filter(
            code_repo__user=seller,
            status=Order.STATUS_SUCCEEDED,
            deleted_at__isnull=True,
            created_at__gte=start,
            created_at__lte=end,
        ).aggregate(total=Sum("total_amount"))["total"] or Decimal("0")
        return (gross * (1 - platform_fee_rate())).quantize(CENT, rounding=ROUND_HALF_UP)

    def get_payout_history(self, user, page: int = 1, limit: int = 20) -> ServiceResult[Dict[str, Any]]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or 20), 1), 100)

        queryset = Payout.objects.filter(seller_profile__user=user).order_by("-created_at")
        offset = (page - 1) * limit
        return service_ok(
            {
                "data": list(queryset[offset : offset + limit]),
                "meta": {"total": queryset.count(), "page": page, "limit": limit},
            }
        )
