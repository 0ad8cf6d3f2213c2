"""
AdminDashboardService - Platform-wide reporting for administrators.

Every section is a read-only aggregate; nothing here writes.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.db.models import Count, F, Q, Sum
from django.utils import timezone

from authentication.domain.models import SellerProfile
from marketplace.catalog.domain.models import CodeRepo, Comment, ContentFlag, Review
from marketplace.ordering.domain.models import Order
from payment_system.domain.models import Payout, PayoutRequest, SalesAggregate
from support.domain.models import SupportTicket
from utils.service_base import BaseService, ServiceResult, service_ok


logger = logging.getLogger(__name__)

User = get_user_model()

NEW_USER_WINDOW = timedelta(days=30)


def _counts_by(queryset, field: str) -> Dict[str, int]:
    return {row[field]: row["count"] for row in queryset.values(field).annotate(count=Count("pk")).order_by(field)}


def _revenue_series(start) -> List[Dict[str, Any]]:
    rows = (
        SalesAggregate.objects.filter(date__gte=start)
        .values("date")
        .annotate(revenue=Sum("revenue"), sales_count=Sum("sales_count"))
        .order_by("date")
    )
    return [
        {"date": row["date"].isoformat(), "revenue": row["revenue"], "sales_count": row["sales_count"]}
        for row in rows
    ]


class AdminDashboardService(BaseService):
    @BaseService.log_performance
    def get_admin_dashboard(self) -> ServiceResult[Dict[str, Any]]:
        return service_ok(
            {
                "sales_overview": self._sales_overview(),
                "user_statistics": self._user_statistics(),
                "repo_metrics": self._repo_metrics(),
                "seller_performance": self._seller_performance(),
                "order_management": self._order_management(),
                "financial_insights": self._financial_insights(),
                "support_tickets": self._support_tickets(),
                "content_moderation": self._content_moderation(),
            }
        )

    def _sales_overview(self) -> Dict[str, Any]:
        today = timezone.localdate()
        start_of_week = today - timedelta(days=today.weekday())
        start_of_month = today.replace(day=1)

        totals = Order.objects.filter(status=Order.STATUS_SUCCEEDED, deleted_at__isnull=True).aggregate(
            revenue=Sum("total_amount"), sales=Count("id")
        )
        revenue = totals["revenue"] or Decimal("0")
        sales = totals["sales"]
        average = (revenue / sales).quantize(Decimal("0.01")) if sales else Decimal("0")

        return {
            "total_revenue": revenue,
            "total_sales": sales,
            "average_order_value": average,
            "daily_revenue": _revenue_series(today),
            "weekly_revenue": _revenue_series(start_of_week),
            "monthly_revenue": _revenue_series(start_of_month),
        }

    def _user_statistics(self) -> Dict[str, Any]:
        return {
            "total_users": User.objects.count(),
            "users_by_role": _counts_by(User.objects.all(), "role"),
            "new_users": User.objects.filter(date_joined__gte=timezone.now() - NEW_USER_WINDOW).count(),
        }

    def _repo_metrics(self) -> Dict[str, Any]:
        live = CodeRepo.objects.filter(deleted_at__isnull=True)
        popular = (
            live.annotate(order_count=Count("orders", filter=Q(orders__status=Order.STATUS_SUCCEEDED)))
            .order_by("-order_count", "-created_at")
            .values("id", "name", "order_count")[:5]
        )
        recent = live.order_by("-created_at").values("id", "name", "status", "created_at")[:5]
        return {
            "total_repos": live.count(),
            "pending_repos": live.filter(status=CodeRepo.STATUS_PENDING).count(),
            "popular_repos": list(popular),
            "recent_repos": list(recent),
        }

    def _seller_performance(self) -> Dict[str, Any]:
        top_sellers = (
            User.objects.filter(role=User.ROLE_SELLER)
            .annotate(
                revenue=Sum(
                    "code_repos__orders__total_amount",
                    filter=Q(code_repos__orders__status=Order.STATUS_SUCCEEDED),
                )
            )
            .filter(revenue__isnull=False)
            .order_by(F("revenue").desc())
            .values("id", "email", "username", "revenue")[:5]
        )
        return {
            "top_sellers": list(top_sellers),
            "pending_applications": SellerProfile.objects.filter(
                verification_status=SellerProfile.STATUS_PENDING
            ).count(),
        }

    def _order_management(self) -> Dict[str, Any]:
        recent = Order.objects.order_by("-created_at").values(
            "id", "status", "total_amount", "created_at", "user__email", "code_repo__name"
        )[:10]
        return {
            "recent_orders": [
                {
                    "id": row["id"],
                    "status": row["status"],
                    "total_amount": row["total_amount"],
                    "created_at": row["created_at"],
                    "buyer_email": row["user__email"],
                    "repo_name": row["code_repo__name"],
                }
                for row in recent
            ],
            "orders_by_status": _counts_by(Order.objects.all(), "status"),
        }

    def _financial_insights(self) -> Dict[str, Any]:
        by_language = (
            Order.objects.filter(status=Order.STATUS_SUCCEEDED, deleted_at__isnull=True)
            .values("code_repo__language")
            .annotate(revenue=Sum("total_amount"))
            .order_by("-revenue")
        )
        paid_out = Payout.objects.exclude(status=Payout.STATUS_FAILED).aggregate(total=Sum("total_amount"))["total"]
        return {
            "revenue_by_language": [
                {"language": row["code_repo__language"], "revenue": row["revenue"]} for row in by_language
            ],
            "pending_payout_requests": PayoutRequest.objects.filter(status=PayoutRequest.STATUS_PENDING).count(),
            "total_paid_out": paid_out or Decimal("0"),
        }

    def _support_tickets(self) -> Dict[str, Any]:
        answered = SupportTicket.objects.exclude(status=SupportTicket.STATUS_TODO).values_list("created_at", "updated_at")
        durations = [(updated - created).total_seconds() for created, updated in answered]
        average_hours = round(sum(durations) / len(durations) / 3600, 2) if durations else None

        return {
            "open_tickets": SupportTicket.objects.filter(status=SupportTicket.STATUS_TODO).count(),
            "tickets_by_status": _counts_by(SupportTicket.objects.all(), "status"),
            "average_response_hours": average_hours,
        }

    def _content_moderation(self) -> Dict[str, Any]:
        flagged_reviews = Review.objects.filter(deleted_at__isnull=True).exclude(flag=ContentFlag.NONE).count()
        flagged_comments = Comment.objects.filter(deleted_at__isnull=True).exclude(flag=ContentFlag.NONE).count()
        return {
            "flagged_reviews": flagged_reviews,
            "flagged_comments": flagged_comments,
            "total_flagged": flagged_reviews + flagged_comments,
        }
