"""
SalesService - Daily seller sales aggregates.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from django.db.models import F
from django.utils import timezone

from payment_system.domain.models import SalesAggregate
from utils.service_base import BaseService, ServiceResult, service_ok


class SalesService(BaseService):
    def update_sales_aggregate(self, seller, amount: Decimal, day: Optional[date] = None) -> SalesAggregate:
        """
        Add one sale of ``amount`` to the seller's row for today.

        Runs inside the caller's transaction; the F() update keeps concurrent
        confirmations from losing increments.
        """
        day = day or timezone.localdate()
        aggregate, _ = SalesAggregate.objects.get_or_create(seller=seller, date=day)
        SalesAggregate.objects.filter(pk=aggregate.pk).update(
            revenue=F("revenue") + Decimal(amount),
            sales_count=F("sales_count") + 1,
        )
        aggregate.refresh_from_db()
        return aggregate

    def get_sales_aggregate(self, seller, start: date, end: date) -> ServiceResult[List[SalesAggregate]]:
        rows = SalesAggregate.objects.filter(seller=seller, date__gte=start, date__lte=end).order_by("date")
        return service_ok(list(rows))
