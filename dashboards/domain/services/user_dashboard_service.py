"""
UserDashboardService - A buyer's purchases, account and recommendations.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from django.db.models import Count, Q, Sum

from marketplace.catalog.domain.models import CodeRepo
from marketplace.ordering.domain.models import Order
from utils.service_base import BaseService, ServiceResult, service_ok


logger = logging.getLogger(__name__)


class UserDashboardService(BaseService):
    @BaseService.log_performance
    def get_user_dashboard(self, user) -> ServiceResult[Dict[str, Any]]:
        purchases = Order.objects.filter(user=user, status=Order.STATUS_SUCCEEDED, deleted_at__isnull=True)

        recent = purchases.order_by("-created_at").values(
            "id", "total_amount", "created_at", "code_repo_id", "code_repo__name"
        )[:5]
        totals = purchases.aggregate(spent=Sum("total_amount"), count=Count("id"))

        most_purchased = (
            purchases.values("code_repo_id", "code_repo__name")
            .annotate(purchases=Count("id"))
            .order_by("-purchases", "code_repo__name")[:5]
        )

        bought = purchases.values_list("code_repo_id", flat=True)
        recommendations = (
            CodeRepo.objects.filter(
                visibility=CodeRepo.VISIBILITY_PUBLIC, status=CodeRepo.STATUS_ACTIVE, deleted_at__isnull=True
            )
            .exclude(id__in=bought)
            .exclude(user=user)
            .annotate(order_count=Count("orders", filter=Q(orders__status=Order.STATUS_SUCCEEDED)))
            .order_by("-order_count", "-created_at")
            .values("id", "name", "language", "price", "order_count")[:5]
        )

        return service_ok(
            {
                "purchase_history": {
                    "recent_purchases": [
                        {
                            "order_id": row["id"],
                            "repo_id": row["code_repo_id"],
                            "repo_name": row["code_repo__name"],
                            "total_amount": row["total_amount"],
                            "created_at": row["created_at"],
                        }
                        for row in recent
                    ],
                    "total_spent": totals["spent"] or Decimal("0.00"),
                    "purchase_count": totals["count"],
                },
                "account_info": {
                    "id": user.pk,
                    "email": user.email,
                    "username": user.username,
                    "role": user.role,
                    "date_joined": user.date_joined,
                    "is_email_verified": user.is_email_verified,
                },
                "usage_statistics": {
                    "most_purchased_repos": [
                        {"repo_id": row["code_repo_id"], "repo_name": row["code_repo__name"], "purchases": row["purchases"]}
                        for row in most_purchased
                    ]
                },
                "recommendations": list(recommendations),
            }
        )
