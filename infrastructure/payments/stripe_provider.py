"""
Stripe Payment Provider
========================

Concrete implementation of PaymentProviderInterface using Stripe
PaymentIntents, Products and Connect (express accounts + transfers).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

import stripe
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .interface import (
    ConnectedAccount,
    PaymentException,
    PaymentIntent,
    PaymentProviderInterface,
    PaymentStatus,
    ProviderProduct,
    Transfer,
    WebhookEvent,
)


logger = logging.getLogger(__name__)

# Transient Stripe failures are retried; everything else surfaces immediately
stripe_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(
        (
            stripe.RateLimitError,
            stripe.APIConnectionError,
            stripe.APIError,
        )
    ),
    reraise=True,
)

_INTENT_STATUS = {
    "requires_payment_method": PaymentStatus.PENDING,
    "requires_confirmation": PaymentStatus.PENDING,
    "requires_action": PaymentStatus.PROCESSING,
    "processing": PaymentStatus.PROCESSING,
    "requires_capture": PaymentStatus.PROCESSING,
    "canceled": PaymentStatus.CANCELED,
    "succeeded": PaymentStatus.SUCCEEDED,
}


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (12.50) into Stripe's minor units (1250)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


class StripeProvider(PaymentProviderInterface):
    """
    Stripe payment provider implementation.

    Configuration (in settings.py):
        STRIPE_SECRET_KEY: Stripe secret API key
        STRIPE_WEBHOOK_SECRET: Secret for the platform webhook endpoint
        STRIPE_CONNECT_WEBHOOK_SECRET: Secret for the Connect webhook endpoint
    """

    def __init__(self):
        stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", "")
        self.webhook_secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", "")
        self.connect_webhook_secret = getattr(settings, "STRIPE_CONNECT_WEBHOOK_SECRET", "")

        if not stripe.api_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    # ----- Payment intents -----

    @stripe_retry
    def _create_payment_intent_api(self, **kwargs):
        return stripe.PaymentIntent.create(**kwargs)

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        try:
            params = {
                "amount": to_minor_units(amount),
                "currency": currency.lower(),
                "automatic_payment_methods": {"enabled": True},
                "metadata": metadata or {},
            }
            if customer_email:
                params["receipt_email"] = customer_email

            intent = self._create_payment_intent_api(**params)
            logger.info(f"Created Stripe payment intent: {intent.id}")
            return self._to_payment_intent(intent)

        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {str(e)}")
            raise PaymentException(f"Failed to create payment intent: {str(e)}") from e

    @stripe_retry
    def _retrieve_payment_intent_api(self, intent_id):
        return stripe.PaymentIntent.retrieve(intent_id)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = self._retrieve_payment_intent_api(intent_id)
            logger.info(f"Retrieved payment intent: {intent_id}")
            return self._to_payment_intent(intent)

        except stripe.StripeError as e:
            logger.error(f"Failed to retrieve payment intent {intent_id}: {str(e)}")
            raise PaymentException(f"Payment intent retrieval failed: {str(e)}") from e

    def _to_payment_intent(self, intent) -> PaymentIntent:
        return PaymentIntent(
            intent_id=intent.id,
            amount=from_minor_units(intent.amount),
            currency=intent.currency,
            status=_INTENT_STATUS.get(intent.status, PaymentStatus.FAILED),
            raw_status=intent.status,
            client_secret=intent.client_secret,
            customer_email=intent.receipt_email,
            metadata=dict(intent.metadata or {}),
        )

    # ----- Catalog -----

    @stripe_retry
    def _create_product_api(self, **kwargs):
        return stripe.Product.create(**kwargs)

    def create_product(
        self,
        name: str,
        description: str,
        price: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderProduct:
        try:
            params = {
                "name": name,
                "metadata": metadata or {},
                "default_price_data": {"currency": currency.lower(), "unit_amount": to_minor_units(price)},
            }
            if description:
                params["description"] = description

            product = self._create_product_api(**params)
            logger.info(f"Created Stripe product: {product.id}")
            return ProviderProduct(product_id=product.id, price_id=product.default_price)

        except stripe.StripeError as e:
            logger.error(f"Stripe product creation failed: {str(e)}")
            raise PaymentException(f"Failed to create product: {str(e)}") from e

    # ----- Connect -----

    @stripe_retry
    def _create_account_api(self, **kwargs):
        return stripe.Account.create(**kwargs)

    def create_connect_account(self, email: str, business_name: str, business_type: str) -> ConnectedAccount:
        try:
            account = self._create_account_api(
                type="express",
                email=email,
                business_type=business_type,
                business_profile={"name": business_name},
                capabilities={"transfers": {"requested": True}},
            )
            logger.info(f"Created Stripe connected account: {account.id}")
            return self._to_connected_account(account)

        except stripe.StripeError as e:
            logger.error(f"Stripe account creation failed: {str(e)}")
            raise PaymentException(f"Failed to create connected account: {str(e)}") from e

    @stripe_retry
    def _create_account_link_api(self, **kwargs):
        return stripe.AccountLink.create(**kwargs)

    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        try:
            link = self._create_account_link_api(
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type="account_onboarding",
            )
            return link.url

        except stripe.StripeError as e:
            logger.error(f"Stripe account link creation failed for {account_id}: {str(e)}")
            raise PaymentException(f"Failed to create onboarding link: {str(e)}") from e

    @stripe_retry
    def _retrieve_account_api(self, account_id):
        return stripe.Account.retrieve(account_id)

    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        try:
            return self._to_connected_account(self._retrieve_account_api(account_id))

        except stripe.StripeError as e:
            logger.error(f"Failed to retrieve connected account {account_id}: {str(e)}")
            raise PaymentException(f"Account retrieval failed: {str(e)}") from e

    def _to_connected_account(self, account) -> ConnectedAccount:
        return ConnectedAccount(
            account_id=account.id,
            details_submitted=bool(account.details_submitted),
            charges_enabled=bool(account.charges_enabled),
            payouts_enabled=bool(account.payouts_enabled),
        )

    # ----- Transfers -----

    @stripe_retry
    def _create_transfer_api(self, **kwargs):
        return stripe.Transfer.create(**kwargs)

    def create_transfer(
        self,
        amount: Decimal,
        currency: str,
        destination_account: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Transfer:
        try:
            params = {
                "amount": to_minor_units(amount),
                "currency": currency.lower(),
                "destination": destination_account,
            }
            if metadata:
                params["metadata"] = metadata

            transfer = self._create_transfer_api(**params)
            logger.info(f"Created Stripe transfer: {transfer.id} to {destination_account}")
            return Transfer(
                transfer_id=transfer.id,
                amount=from_minor_units(transfer.amount),
                currency=transfer.currency,
                destination=transfer.destination,
            )

        except stripe.StripeError as e:
            logger.error(f"Stripe transfer failed: {str(e)}")
            raise PaymentException(f"Transfer failed: {str(e)}") from e

    # ----- Webhooks -----

    def verify_webhook(self, payload: bytes, signature: str, connect: bool = False) -> WebhookEvent:
        secret = self.connect_webhook_secret if connect else self.webhook_secret
        try:
            event = stripe.Webhook.construct_event(payload, signature, secret)
            logger.info(f"Verified Stripe webhook event: {event['type']}")

            return WebhookEvent(
                event_id=event["id"],
                event_type=event["type"],
                data=event["data"]["object"],
                account=event.get("account"),
            )

        except ValueError as e:
            logger.error(f"Invalid webhook payload: {str(e)}")
            raise PaymentException("Invalid webhook payload") from e
        except stripe.SignatureVerificationError as e:
            logger.error(f"Webhook signature verification failed: {str(e)}")
            raise PaymentException("Webhook signature verification failed") from e
