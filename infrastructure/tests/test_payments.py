"""
Payment Provider Tests
=======================
"""

import json
from decimal import Decimal
from unittest.mock import MagicMock, patch

import stripe
from django.test import SimpleTestCase, override_settings

from infrastructure.payments import (
    MockPaymentProvider,
    PaymentException,
    PaymentFactory,
    PaymentStatus,
    StripeProvider,
)
from infrastructure.payments.mock_provider import MOCK_WEBHOOK_SIGNATURE
from infrastructure.payments.stripe_provider import from_minor_units, to_minor_units


class MinorUnitsTest(SimpleTestCase):
    def test_round_trip_examples(self):
        self.assertEqual(to_minor_units(Decimal("12.50")), 1250)
        self.assertEqual(to_minor_units(Decimal("0.005")), 1)
        self.assertEqual(from_minor_units(1999), Decimal("19.99"))


@override_settings(
    STRIPE_SECRET_KEY="sk_test_123",
    STRIPE_WEBHOOK_SECRET="whsec_platform",
    STRIPE_CONNECT_WEBHOOK_SECRET="whsec_connect",
)
class StripeProviderTest(SimpleTestCase):
    def setUp(self):
        self.provider = StripeProvider()

    @patch("infrastructure.payments.stripe_provider.stripe.PaymentIntent.create")
    def test_create_payment_intent(self, mock_create):
        mock_create.return_value = MagicMock(
            id="pi_123",
            amount=2500,
            currency="myr",
            status="requires_payment_method",
            client_secret="pi_123_secret",
            receipt_email="buyer@example.com",
            metadata={"repo_id": "r1"},
        )

        intent = self.provider.create_payment_intent(
            Decimal("25.00"), "MYR", metadata={"repo_id": "r1"}, customer_email="buyer@example.com"
        )

        kwargs = mock_create.call_args.kwargs
        self.assertEqual(kwargs["amount"], 2500)
        self.assertEqual(kwargs["currency"], "myr")
        self.assertEqual(kwargs["receipt_email"], "buyer@example.com")
        self.assertEqual(intent.amount, Decimal("25.00"))
        self.assertEqual(intent.status, PaymentStatus.PENDING)
        self.assertEqual(intent.metadata, {"repo_id": "r1"})

    @patch("infrastructure.payments.stripe_provider.stripe.PaymentIntent.create")
    def test_create_payment_intent_error(self, mock_create):
        mock_create.side_effect = stripe.InvalidRequestError("Amount too small", param="amount")

        with self.assertRaises(PaymentException):
            self.provider.create_payment_intent(Decimal("0.10"), "myr")

    @patch("infrastructure.payments.stripe_provider.stripe.PaymentIntent.retrieve")
    def test_retrieve_maps_status(self, mock_retrieve):
        mock_retrieve.return_value = MagicMock(
            id="pi_1",
            amount=1000,
            currency="myr",
            status="succeeded",
            client_secret="s",
            receipt_email=None,
            metadata={},
        )

        intent = self.provider.retrieve_payment_intent("pi_1")

        self.assertEqual(intent.status, PaymentStatus.SUCCEEDED)
        self.assertEqual(intent.raw_status, "succeeded")

    @patch("infrastructure.payments.stripe_provider.stripe.Transfer.create")
    def test_create_transfer_in_minor_units(self, mock_create):
        mock_create.return_value = MagicMock(id="tr_1", amount=9000, currency="myr", destination="acct_1")

        transfer = self.provider.create_transfer(Decimal("90.00"), "myr", "acct_1", metadata={"payout_id": "p"})

        kwargs = mock_create.call_args.kwargs
        self.assertEqual(kwargs["amount"], 9000)
        self.assertEqual(kwargs["destination"], "acct_1")
        self.assertEqual(transfer.transfer_id, "tr_1")
        self.assertEqual(transfer.amount, Decimal("90.00"))

    @patch("infrastructure.payments.stripe_provider.stripe.Transfer.create")
    def test_transfer_error(self, mock_create):
        mock_create.side_effect = stripe.InvalidRequestError("No such destination", param="destination")

        with self.assertRaises(PaymentException):
            self.provider.create_transfer(Decimal("10.00"), "myr", "acct_missing")

    @patch("infrastructure.payments.stripe_provider.stripe.Product.create")
    def test_create_product(self, mock_create):
        mock_create.return_value = MagicMock(id="prod_1", default_price="price_1")

        product = self.provider.create_product("Navbar", "", Decimal("15.00"), "myr")

        self.assertEqual((product.product_id, product.price_id), ("prod_1", "price_1"))
        self.assertEqual(mock_create.call_args.kwargs["default_price_data"]["unit_amount"], 1500)
        self.assertNotIn("description", mock_create.call_args.kwargs)

    @patch("infrastructure.payments.stripe_provider.stripe.Webhook.construct_event")
    def test_verify_webhook_uses_matching_secret(self, mock_construct):
        mock_construct.return_value = {
            "id": "evt_1",
            "type": "account.updated",
            "data": {"object": {"id": "acct_1"}},
            "account": "acct_1",
        }

        event = self.provider.verify_webhook(b"{}", "sig", connect=True)

        mock_construct.assert_called_once_with(b"{}", "sig", "whsec_connect")
        self.assertEqual(event.event_type, "account.updated")
        self.assertEqual(event.account, "acct_1")

    @patch("infrastructure.payments.stripe_provider.stripe.Webhook.construct_event")
    def test_verify_webhook_bad_signature(self, mock_construct):
        mock_construct.side_effect = stripe.SignatureVerificationError("bad", "sig")

        with self.assertRaises(PaymentException):
            self.provider.verify_webhook(b"{}", "sig")


class MockPaymentProviderTest(SimpleTestCase):
    def setUp(self):
        self.provider = MockPaymentProvider()

    def test_intent_lifecycle(self):
        intent = self.provider.create_payment_intent(Decimal("20.00"), "MYR", metadata={"repo_id": "r"})

        self.assertEqual(intent.status, PaymentStatus.PENDING)
        self.provider.mark_succeeded(intent.intent_id)
        self.assertEqual(self.provider.retrieve_payment_intent(intent.intent_id).status, PaymentStatus.SUCCEEDED)

    def test_unknown_intent(self):
        with self.assertRaises(PaymentException):
            self.provider.retrieve_payment_intent("pi_missing")

    def test_connect_onboarding(self):
        account = self.provider.create_connect_account("s@example.com", "Shop", "individual")

        self.assertIn(account.account_id, self.provider.create_account_link(account.account_id, "r", "u"))
        self.assertTrue(self.provider.complete_onboarding(account.account_id).payouts_enabled)

    def test_transfers_recorded(self):
        self.provider.create_transfer(Decimal("50.00"), "myr", "acct_1")

        self.assertEqual(len(self.provider.transfers), 1)
        self.assertEqual(self.provider.transfers[0].destination, "acct_1")

    def test_verify_webhook(self):
        payload = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded", "data": {"object": {"id": "pi_1"}}})

        event = self.provider.verify_webhook(payload.encode(), MOCK_WEBHOOK_SIGNATURE)

        self.assertEqual(event.data["id"], "pi_1")
        self.assertIsNone(event.account)

    def test_verify_webhook_rejects_signature(self):
        with self.assertRaises(PaymentException):
            self.provider.verify_webhook(b"{}", "forged")

    def test_verify_webhook_rejects_malformed_payload(self):
        with self.assertRaises(PaymentException):
            self.provider.verify_webhook(b"{}", MOCK_WEBHOOK_SIGNATURE)


class PaymentFactoryTest(SimpleTestCase):
    def test_backends(self):
        self.assertIsInstance(PaymentFactory.create("mock"), MockPaymentProvider)
        self.assertIsInstance(PaymentFactory.create("stripe"), StripeProvider)

    def test_invalid_backend(self):
        with self.assertRaises(ValueError):
            PaymentFactory.create("paypal")
