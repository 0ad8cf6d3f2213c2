"""
Tests for PayoutService and the payout/access Celery tasks
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.test import TestCase
from django.utils import timezone

from authentication.tests.factories import SellerProfileFactory, UserFactory
from infrastructure.container import container
from infrastructure.payments.interface import PaymentException, PaymentProviderInterface
from infrastructure.payments.mock_provider import MockPaymentProvider
from marketplace.models import Order, UserRepoAccess
from marketplace.tests.factories import CodeRepoFactory, OrderFactory, UserRepoAccessFactory
from payment_system.domain.services.payout_service import PayoutService
from payment_system.models import Payout
from payment_system.Tasks.access_tasks import expire_repo_access_task
from payment_system.Tasks.payout_tasks import execute_payout_task
from payment_system.tests.factories import PayoutFactory
from utils.service_base import ErrorCodes


class ExecutePayoutTest(TestCase):
    def setUp(self):
        self.provider = MockPaymentProvider()
        self.service = PayoutService(self.provider)
        self.payout = PayoutFactory(total_amount=Decimal("75.50"))

    def test_transfers_to_connected_account(self):
        result = self.service.execute_payout(self.payout)

        self.assertTrue(result.ok)
        self.payout.refresh_from_db()
        self.assertEqual(self.payout.status, Payout.STATUS_PROCESSING)
        self.assertTrue(self.payout.stripe_payout_id.startswith("tr_mock_"))
        transfer = self.provider.transfers[0]
        self.assertEqual(transfer.amount, Decimal("75.50"))
        self.assertEqual(transfer.destination, self.payout.seller_profile.stripe_account_id)

    def test_requires_destination(self):
        payout = PayoutFactory(seller_profile=SellerProfileFactory(stripe_account_id=None))

        result = self.service.execute_payout(payout)

        self.assertEqual(result.error, ErrorCodes.NO_PAYOUT_DESTINATION)
        payout.refresh_from_db()
        self.assertEqual(payout.status, Payout.STATUS_FAILED)
        self.assertEqual(self.provider.transfers, [])

    def test_provider_error_marks_failed_and_reraises(self):
        provider = MagicMock(spec=PaymentProviderInterface)
        provider.create_transfer.side_effect = PaymentException("insufficient platform funds")

        with self.assertRaises(PaymentException):
            PayoutService(provider).execute_payout(self.payout)

        self.payout.refresh_from_db()
        self.assertEqual(self.payout.status, Payout.STATUS_FAILED)
        self.assertEqual(self.payout.failure_reason, "insufficient platform funds")

    def test_failed_payout_can_be_retried(self):
        Payout.objects.filter(pk=self.payout.pk).update(status=Payout.STATUS_FAILED)
        self.payout.refresh_from_db()

        result = self.service.execute_payout(self.payout)

        self.assertEqual(result.value.status, Payout.STATUS_PROCESSING)

    def test_sent_payout_is_not_sent_again(self):
        self.service.execute_payout(self.payout)

        result = self.service.execute_payout(self.payout)

        self.assertEqual(result.error, ErrorCodes.INVALID_STATE)
        self.assertEqual(len(self.provider.transfers), 1)


class PayoutReportingTest(TestCase):
    def setUp(self):
        self.service = PayoutService(MockPaymentProvider())
        self.seller = SellerProfileFactory().user

    def test_calculate_payout_amount_applies_fee(self):
        repo = CodeRepoFactory(user=self.seller)
        OrderFactory(code_repo=repo, total_amount=Decimal("25.00"))
        OrderFactory(code_repo=repo, total_amount=Decimal("75.00"))
        OrderFactory(code_repo=repo, total_amount=Decimal("40.00"), status=Order.STATUS_PROCESSING)
        old = OrderFactory(code_repo=repo, total_amount=Decimal("60.00"))
        Order.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=40))
        OrderFactory(total_amount=Decimal("99.00"))

        now = timezone.now()
        amount = self.service.calculate_payout_amount(self.seller, now - timedelta(days=30), now + timedelta(minutes=1))

        self.assertEqual(amount, Decimal("90.00"))

    def test_payout_history_is_paginated(self):
        profile = self.seller.seller_profile
        for _ in range(3):
            PayoutFactory(seller_profile=profile)
        PayoutFactory()

        result = self.service.get_payout_history(self.seller, page=2, limit=2)

        self.assertEqual(len(result.value["data"]), 1)
        self.assertEqual(result.value["meta"], {"total": 3, "page": 2, "limit": 2})


class PayoutTasksTest(TestCase):
    def setUp(self):
        container.configure_for_testing()

    def test_execute_payout_task(self):
        payout = PayoutFactory()

        outcome = execute_payout_task.apply(args=[str(payout.id)]).get()

        self.assertTrue(outcome["success"])
        payout.refresh_from_db()
        self.assertEqual(payout.status, Payout.STATUS_PROCESSING)
        self.assertEqual(outcome["transfer_id"], payout.stripe_payout_id)

    def test_execute_payout_task_unknown_payout(self):
        outcome = execute_payout_task.apply(args=["00000000-0000-0000-0000-000000000000"]).get()

        self.assertFalse(outcome["success"])

    def test_execute_payout_task_gives_up_after_max_retries(self):
        payout = PayoutFactory()
        service = container.payout_service()

        with patch.object(service, "execute_payout", side_effect=PaymentException("account restricted")), patch.object(
            execute_payout_task, "retry", side_effect=execute_payout_task.MaxRetriesExceededError()
        ) as mock_retry:
            outcome = execute_payout_task.apply(args=[str(payout.id)]).get()

        self.assertFalse(outcome["success"])
        self.assertEqual(outcome["error"], "account restricted")
        self.assertNotIn("exc", mock_retry.call_args.kwargs)

    def test_expire_repo_access_task(self):
        user = UserFactory()
        UserRepoAccessFactory(user=user, expires_at=timezone.now() - timedelta(minutes=5))
        kept = UserRepoAccessFactory(user=user)

        outcome = expire_repo_access_task.apply().get()

        self.assertEqual(outcome, {"success": True, "expired": 1})
        self.assertEqual(list(UserRepoAccess.objects.values_list("id", flat=True)), [kept.id])
