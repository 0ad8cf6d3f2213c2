"""
Tests for PayoutRequestService
"""

import uuid
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.conf import settings
from django.test import TestCase
from django.utils import timezone

from authentication.models import SellerProfile
from authentication.tests.factories import AdminFactory, BankAccountFactory, SellerProfileFactory, UserFactory
from marketplace.tests.factories import CodeRepoFactory, OrderFactory
from payment_system.domain.services.payout_request_service import PayoutRequestService
from payment_system.models import Payout, PayoutRequest
from payment_system.tests.factories import PayoutRequestFactory
from utils.service_base import ErrorCodes, ServiceError


class CreatePayoutRequestTest(TestCase):
    def setUp(self):
        self.service = PayoutRequestService()
        self.profile = SellerProfileFactory(balance=Decimal("200.00"))
        self.user = self.profile.user

    def test_creates_pending_request(self):
        result = self.service.create_payout_request(self.user, Decimal("100.00"))

        self.assertTrue(result.ok)
        self.assertEqual(result.value.status, PayoutRequest.STATUS_PENDING)
        self.assertIsNone(result.value.last_payout_date)
        self.profile.refresh_from_db()
        self.assertIsNotNone(self.profile.last_payout_date)
        # Requesting does not touch the balance
        self.assertEqual(self.profile.balance, Decimal("200.00"))

    def test_stores_previous_payout_date(self):
        previous = timezone.now() - timedelta(days=30)
        SellerProfile.objects.filter(pk=self.profile.pk).update(last_payout_date=previous)

        result = self.service.create_payout_request(self.user, Decimal("60.00"))

        self.assertEqual(result.value.last_payout_date, previous)

    def test_requires_seller_profile(self):
        result = self.service.create_payout_request(UserFactory(), Decimal("100.00"))

        self.assertEqual(result.error, ErrorCodes.NOT_FOUND)

    def test_requires_approved_seller(self):
        profile = SellerProfileFactory(verification_status=SellerProfile.STATUS_PENDING, balance=Decimal("200.00"))

        result = self.service.create_payout_request(profile.user, Decimal("10.00"))

        # Approval is checked before the minimum
        self.assertEqual(result.error, ErrorCodes.SELLER_NOT_APPROVED)

    def test_cooldown_from_latest_request(self):
        PayoutRequestFactory(seller_profile=self.profile, status=PayoutRequest.STATUS_REJECTED)

        result = self.service.create_payout_request(self.user, Decimal("100.00"))

        self.assertEqual(result.error, ErrorCodes.COOLDOWN_ACTIVE)
        self.assertEqual(result.error_detail, "Cooldown period has not elapsed since last payout request")

    def test_cooldown_elapsed(self):
        old = PayoutRequestFactory(seller_profile=self.profile, status=PayoutRequest.STATUS_PROCESSED)
        PayoutRequest.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=8))

        result = self.service.create_payout_request(self.user, Decimal("100.00"))

        self.assertTrue(result.ok)

    def test_cooldown_from_profile_date_without_requests(self):
        SellerProfile.objects.filter(pk=self.profile.pk).update(last_payout_date=timezone.now() - timedelta(days=2))

        result = self.service.create_payout_request(self.user, Decimal("100.00"))

        self.assertEqual(result.error, ErrorCodes.COOLDOWN_ACTIVE)

    def test_approved_seller_passes_approval_check(self):
        self.assertTrue(self.profile.is_approved)

        result = self.service.create_payout_request(self.user, Decimal("50.00"))

        self.assertTrue(result.ok)
        self.assertEqual(PayoutRequest.objects.filter(seller_profile=self.profile).count(), 1)

    def test_cooldown_rechecked_under_lock(self):
        # Another request lands between the early check and the row lock
        with patch.object(PayoutRequestService, "_in_cooldown", side_effect=[False, True]):
            result = self.service.create_payout_request(self.user, Decimal("100.00"))

        self.assertEqual(result.error, ErrorCodes.COOLDOWN_ACTIVE)
        self.assertFalse(PayoutRequest.objects.exists())
        self.profile.refresh_from_db()
        self.assertIsNone(self.profile.last_payout_date)

    def test_store_request_refuses_second_request_in_cooldown(self):
        PayoutRequestFactory(seller_profile=self.profile)

        with self.assertRaises(ServiceError) as ctx:
            self.service._store_request(self.profile.pk, Decimal("100.00"))

        self.assertEqual(ctx.exception.code, ErrorCodes.COOLDOWN_ACTIVE)
        self.assertEqual(PayoutRequest.objects.filter(seller_profile=self.profile).count(), 1)

    def test_below_minimum(self):
        result = self.service.create_payout_request(self.user, Decimal("49.99"))

        self.assertEqual(result.error, ErrorCodes.BELOW_MINIMUM)
        self.assertEqual(result.error_detail, "Minimum payout amount is $50")

    def test_exceeds_balance(self):
        result = self.service.create_payout_request(self.user, Decimal("200.01"))

        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_BALANCE)
        self.assertEqual(result.error_detail, "Requested amount exceeds available balance")
        self.assertFalse(PayoutRequest.objects.exists())
        self.profile.refresh_from_db()
        self.assertIsNone(self.profile.last_payout_date)


class ProcessPayoutRequestTest(TestCase):
    def setUp(self):
        self.service = PayoutRequestService()
        self.admin = AdminFactory()
        self.profile = SellerProfileFactory(balance=Decimal("200.00"))
        self.request = PayoutRequestFactory(seller_profile=self.profile, total_amount=Decimal("120.00"))

    @patch("payment_system.domain.services.payout_request_service._enqueue_payout")
    def test_approve_debits_and_queues_transfer(self, mock_enqueue):
        with self.captureOnCommitCallbacks(execute=True):
            result = self.service.process_payout_request(self.request.id, "approve", self.admin, "ok")

        self.assertTrue(result.ok)
        self.request.refresh_from_db()
        self.assertEqual(self.request.status, PayoutRequest.STATUS_PROCESSED)
        self.assertEqual(self.request.processed_by, self.admin)
        self.assertEqual(self.request.admin_note, "ok")
        self.assertIsNotNone(self.request.processed_at)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.balance, Decimal("80.00"))
        payout = Payout.objects.get(payout_request=self.request)
        self.assertEqual(payout.status, Payout.STATUS_PENDING)
        self.assertEqual(payout.currency, settings.PAYOUT_CURRENCY)
        mock_enqueue.assert_called_once_with(str(payout.id))

    @patch("payment_system.domain.services.payout_request_service._enqueue_payout")
    def test_request_is_processed_once(self, mock_enqueue):
        self.service.process_payout_request(self.request.id, "approve", self.admin)

        second = self.service.process_payout_request(self.request.id, "approve", self.admin)

        self.assertEqual(second.error, ErrorCodes.INVALID_STATE)
        self.assertEqual(Payout.objects.count(), 1)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.balance, Decimal("80.00"))

    def test_approve_without_enough_balance(self):
        SellerProfile.objects.filter(pk=self.profile.pk).update(balance=Decimal("50.00"))

        result = self.service.process_payout_request(self.request.id, "approve", self.admin)

        self.assertEqual(result.error, ErrorCodes.INSUFFICIENT_BALANCE)
        self.request.refresh_from_db()
        self.assertEqual(self.request.status, PayoutRequest.STATUS_PENDING)
        self.assertFalse(Payout.objects.exists())

    def test_reject_keeps_balance(self):
        result = self.service.process_payout_request(self.request.id, "reject", self.admin, "missing bank details")

        self.assertEqual(result.value.status, PayoutRequest.STATUS_REJECTED)
        self.assertEqual(result.value.processed_by, self.admin)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.balance, Decimal("200.00"))
        self.assertFalse(Payout.objects.exists())

    def test_unknown_action(self):
        result = self.service.process_payout_request(self.request.id, "hold", self.admin)

        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)

    def test_unknown_request(self):
        result = self.service.process_payout_request(uuid.uuid4(), "approve", self.admin)

        self.assertEqual(result.error, ErrorCodes.NOT_FOUND)


class PayoutRequestQueriesTest(TestCase):
    def setUp(self):
        self.service = PayoutRequestService()
        self.approved = PayoutRequestFactory()
        self.unapproved = PayoutRequestFactory(
            seller_profile=SellerProfileFactory(verification_status=SellerProfile.STATUS_REJECTED)
        )

    def test_seller_balance(self):
        result = self.service.get_seller_balance(self.approved.seller_profile.user)

        self.assertEqual(result.value, {"balance": Decimal("500.00"), "last_payout_request_date": None})

    def test_seller_balance_includes_last_request_date(self):
        requested_at = timezone.now() - timedelta(days=3)
        profile = self.approved.seller_profile
        SellerProfile.objects.filter(pk=profile.pk).update(last_payout_date=requested_at)

        result = self.service.get_seller_balance(profile.user)

        self.assertEqual(result.value["last_payout_request_date"], requested_at)

    def test_seller_balance_without_profile(self):
        result = self.service.get_seller_balance(UserFactory())

        self.assertEqual(result.error, ErrorCodes.NOT_FOUND)

    def test_paginated_meta(self):
        result = self.service.get_paginated_payout_requests(page=1, limit=1)

        self.assertEqual(len(result.value["data"]), 1)
        self.assertEqual(result.value["meta"], {"total": 2, "page": 1, "limit": 1})

    def test_all_requests_only_from_approved_sellers(self):
        result = self.service.get_all_payout_requests()

        self.assertEqual([r.id for r in result.value], [self.approved.id])

    def test_requests_by_user(self):
        result = self.service.get_payout_requests_by_user(self.unapproved.seller_profile.user)

        self.assertEqual([r.id for r in result.value], [self.unapproved.id])

    def test_detail_includes_bank_account_and_orders(self):
        profile = self.approved.seller_profile
        BankAccountFactory(seller_profile=profile)
        order = OrderFactory(code_repo=CodeRepoFactory(user=profile.user))
        OrderFactory()

        result = self.service.get_payout_request(self.approved.id)

        self.assertEqual(result.value["bank_account"].seller_profile, profile)
        self.assertEqual([o.id for o in result.value["orders"]], [order.id])

    def test_update_status(self):
        result = self.service.update_payout_request(self.approved.id, PayoutRequest.STATUS_APPROVED)

        self.assertEqual(result.value.status, PayoutRequest.STATUS_APPROVED)

    def test_processed_request_cannot_be_deleted(self):
        processed = PayoutRequestFactory(status=PayoutRequest.STATUS_PROCESSED)

        result = self.service.delete_payout_request(processed.id)

        self.assertEqual(result.error, ErrorCodes.INVALID_STATE)
        self.assertTrue(PayoutRequest.objects.filter(id=processed.id).exists())

    def test_delete_pending_request(self):
        result = self.service.delete_payout_request(self.approved.id)

        self.assertTrue(result.ok)
        self.assertFalse(PayoutRequest.objects.filter(id=self.approved.id).exists())
