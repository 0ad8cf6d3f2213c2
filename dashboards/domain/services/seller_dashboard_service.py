"""
SellerDashboardService - A seller's own sales, balance and latest reviews.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict

from django.utils import timezone

from authentication.domain.models import SellerProfile
from marketplace.catalog.domain.models import Review
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

MAX_DAYS = 365


class SellerDashboardService(BaseService):
    def __init__(self, sales_service):
        super().__init__()
        self.sales_service = sales_service

    @BaseService.log_performance
    def get_seller_dashboard(self, user, days: int = 30) -> ServiceResult[Dict[str, Any]]:
        """
        Sales for the last ``days`` days (today included), one entry per day.

        Days without sales are reported with zero revenue.
        """
        if not 1 <= days <= MAX_DAYS:
            return service_err(ErrorCodes.INVALID_INPUT, f"days must be between 1 and {MAX_DAYS}")

        end = timezone.localdate()
        start = end - timedelta(days=days - 1)
        rows = {row.date: row for row in self.sales_service.get_sales_aggregate(user, start, end).value}

        series = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            row = rows.get(day)
            series.append(
                {
                    "date": day.isoformat(),
                    "revenue": row.revenue if row else Decimal("0.00"),
                    "sales_count": row.sales_count if row else 0,
                }
            )

        profile = SellerProfile.objects.filter(user=user).only("balance").first()
        reviews = (
            Review.objects.select_related("code_repo", "user")
            .filter(code_repo__user=user, code_repo__deleted_at__isnull=True, deleted_at__isnull=True)
            .order_by("-created_at")[:5]
        )

        return service_ok(
            {
                "sales": series,
                "totals": {
                    "revenue": sum((entry["revenue"] for entry in series), Decimal("0.00")),
                    "sales_count": sum(entry["sales_count"] for entry in series),
                },
                "balance": profile.balance if profile else Decimal("0.00"),
                "latest_reviews": [
                    {
                        "id": review.id,
                        "content": review.content,
                        "rating": review.rating,
                        "created_at": review.created_at,
                        "repo_name": review.code_repo.name,
                        "user_name": review.user.username,
                    }
                    for review in reviews
                ],
            }
        )
