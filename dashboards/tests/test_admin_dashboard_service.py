"""
Tests for AdminDashboardService
"""

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from authentication.models import SellerProfile
from authentication.tests.factories import SellerFactory, SellerProfileFactory, UserFactory
from dashboards.domain.services import AdminDashboardService
from marketplace.models import CodeRepo, ContentFlag, Order
from marketplace.tests.factories import CodeRepoFactory, CommentFactory, OrderFactory, ReviewFactory
from payment_system.models import Payout
from payment_system.tests.factories import PayoutFactory, PayoutRequestFactory, SalesAggregateFactory
from support.models import SupportTicket
from support.tests.factories import SupportTicketFactory


class AdminDashboardTest(TestCase):
    def setUp(self):
        self.service = AdminDashboardService()
        self.seller = SellerFactory()
        self.repo = CodeRepoFactory(user=self.seller, price=Decimal("30.00"), language=CodeRepo.LANGUAGE_TSX)

    def dashboard(self):
        result = self.service.get_admin_dashboard()
        self.assertTrue(result.ok)
        return result.value

    def test_sections_present(self):
        data = self.dashboard()

        self.assertEqual(
            set(data),
            {
                "sales_overview",
                "user_statistics",
                "repo_metrics",
                "seller_performance",
                "order_management",
                "financial_insights",
                "support_tickets",
                "content_moderation",
            },
        )

    def test_sales_overview_counts_successful_orders_only(self):
        OrderFactory(code_repo=self.repo, total_amount=Decimal("30.00"))
        OrderFactory(code_repo=self.repo, total_amount=Decimal("10.00"))
        OrderFactory(code_repo=self.repo, status=Order.STATUS_CANCELLED, total_amount=Decimal("99.00"))
        SalesAggregateFactory(seller=self.seller, revenue=Decimal("40.00"), sales_count=2)

        sales = self.dashboard()["sales_overview"]

        self.assertEqual(sales["total_revenue"], Decimal("40.00"))
        self.assertEqual(sales["total_sales"], 2)
        self.assertEqual(sales["average_order_value"], Decimal("20.00"))
        self.assertEqual(sales["daily_revenue"][0]["revenue"], Decimal("40.00"))
        self.assertEqual(sales["monthly_revenue"][0]["sales_count"], 2)

    def test_average_order_value_without_sales(self):
        self.assertEqual(self.dashboard()["sales_overview"]["average_order_value"], Decimal("0"))

    def test_user_statistics(self):
        UserFactory.create_batch(2)

        stats = self.dashboard()["user_statistics"]

        self.assertEqual(stats["total_users"], 3)
        self.assertEqual(stats["users_by_role"], {"seller": 1, "user": 2})
        self.assertEqual(stats["new_users"], 3)

    def test_repo_metrics(self):
        popular = CodeRepoFactory()
        OrderFactory.create_batch(2, code_repo=popular)
        CodeRepoFactory(status=CodeRepo.STATUS_PENDING)
        CodeRepoFactory(deleted_at=timezone.now())

        metrics = self.dashboard()["repo_metrics"]

        self.assertEqual(metrics["total_repos"], 3)
        self.assertEqual(metrics["pending_repos"], 1)
        self.assertEqual(metrics["popular_repos"][0]["id"], popular.id)
        self.assertEqual(metrics["popular_repos"][0]["order_count"], 2)
        self.assertEqual(len(metrics["recent_repos"]), 3)

    def test_seller_performance(self):
        OrderFactory(code_repo=self.repo, total_amount=Decimal("30.00"))
        SellerProfileFactory(verification_status=SellerProfile.STATUS_PENDING)

        performance = self.dashboard()["seller_performance"]

        self.assertEqual(performance["top_sellers"][0]["id"], self.seller.id)
        self.assertEqual(performance["top_sellers"][0]["revenue"], Decimal("30.00"))
        self.assertEqual(performance["pending_applications"], 1)

    def test_order_management(self):
        order = OrderFactory(code_repo=self.repo)
        OrderFactory(code_repo=self.repo, status=Order.STATUS_PROCESSING)

        orders = self.dashboard()["order_management"]

        self.assertEqual(len(orders["recent_orders"]), 2)
        self.assertIn(order.id, [row["id"] for row in orders["recent_orders"]])
        self.assertEqual(orders["orders_by_status"], {"PROCESSING": 1, "SUCCEEDED": 1})

    def test_financial_insights(self):
        OrderFactory(code_repo=self.repo, total_amount=Decimal("30.00"))
        PayoutRequestFactory()
        PayoutFactory(total_amount=Decimal("80.00"), status=Payout.STATUS_COMPLETED)
        PayoutFactory(total_amount=Decimal("20.00"), status=Payout.STATUS_FAILED)

        finance = self.dashboard()["financial_insights"]

        self.assertEqual(finance["revenue_by_language"], [{"language": "TSX", "revenue": Decimal("30.00")}])
        self.assertEqual(finance["pending_payout_requests"], 1)
        self.assertEqual(finance["total_paid_out"], Decimal("80.00"))

    def test_support_tickets(self):
        SupportTicketFactory()
        answered = SupportTicketFactory(status=SupportTicket.STATUS_DONE)
        SupportTicket.objects.filter(pk=answered.pk).update(updated_at=answered.created_at + timedelta(hours=3))

        tickets = self.dashboard()["support_tickets"]

        self.assertEqual(tickets["open_tickets"], 1)
        self.assertEqual(tickets["tickets_by_status"], {"done": 1, "todo": 1})
        self.assertEqual(tickets["average_response_hours"], 3.0)

    def test_average_response_without_answered_tickets(self):
        SupportTicketFactory()

        self.assertIsNone(self.dashboard()["support_tickets"]["average_response_hours"])

    def test_content_moderation(self):
        ReviewFactory(flag=ContentFlag.SPAM)
        ReviewFactory()
        CommentFactory(flag=ContentFlag.HARASSMENT)

        moderation = self.dashboard()["content_moderation"]

        self.assertEqual(moderation, {"flagged_reviews": 1, "flagged_comments": 1, "total_flagged": 2})
