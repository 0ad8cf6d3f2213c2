"""
Mock Payment Provider
=====================

In-memory implementation of PaymentProviderInterface for tests and local
development. Nothing leaves the process; created objects are kept in
dictionaries so tests can inspect or tweak them.
"""

import json
import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

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

MOCK_WEBHOOK_SIGNATURE = "mock-signature"


class MockPaymentProvider(PaymentProviderInterface):
    """
    Payment provider double.

    Payment intents are created as ``requires_payment_method``; call
    ``mark_succeeded`` to simulate the buyer confirming the payment.
    """

    def __init__(self):
        self.intents: Dict[str, PaymentIntent] = {}
        self.products: Dict[str, ProviderProduct] = {}
        self.accounts: Dict[str, ConnectedAccount] = {}
        self.transfers: List[Transfer] = []

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        intent_id = f"pi_mock_{uuid.uuid4().hex[:16]}"
        intent = PaymentIntent(
            intent_id=intent_id,
            amount=Decimal(amount),
            currency=currency.lower(),
            status=PaymentStatus.PENDING,
            raw_status="requires_payment_method",
            client_secret=f"{intent_id}_secret_mock",
            customer_email=customer_email,
            metadata=dict(metadata or {}),
        )
        self.intents[intent_id] = intent
        logger.info(f"[MOCK PAYMENT] Created payment intent {intent_id} for {amount} {currency}")
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            return self.intents[intent_id]
        except KeyError:
            raise PaymentException(f"Payment intent retrieval failed: no such intent {intent_id}") from None

    def mark_succeeded(self, intent_id: str) -> PaymentIntent:
        intent = self.retrieve_payment_intent(intent_id)
        intent.status = PaymentStatus.SUCCEEDED
        intent.raw_status = "succeeded"
        return intent

    def create_product(
        self,
        name: str,
        description: str,
        price: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderProduct:
        product = ProviderProduct(
            product_id=f"prod_mock_{uuid.uuid4().hex[:12]}",
            price_id=f"price_mock_{uuid.uuid4().hex[:12]}",
        )
        self.products[product.product_id] = product
        logger.info(f"[MOCK PAYMENT] Created product {product.product_id} ({name})")
        return product

    def create_connect_account(self, email: str, business_name: str, business_type: str) -> ConnectedAccount:
        account = ConnectedAccount(account_id=f"acct_mock_{uuid.uuid4().hex[:12]}")
        self.accounts[account.account_id] = account
        logger.info(f"[MOCK PAYMENT] Created connected account {account.account_id} for {business_name}")
        return account

    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        if account_id not in self.accounts:
            raise PaymentException(f"Failed to create onboarding link: unknown account {account_id}")
        return f"https://connect.mock/onboarding/{account_id}"

    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        try:
            return self.accounts[account_id]
        except KeyError:
            raise PaymentException(f"Account retrieval failed: unknown account {account_id}") from None

    def complete_onboarding(self, account_id: str) -> ConnectedAccount:
        account = self.retrieve_account(account_id)
        account.details_submitted = True
        account.charges_enabled = True
        account.payouts_enabled = True
        return account

    def create_transfer(
        self,
        amount: Decimal,
        currency: str,
        destination_account: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Transfer:
        transfer = Transfer(
            transfer_id=f"tr_mock_{uuid.uuid4().hex[:12]}",
            amount=Decimal(amount),
            currency=currency.lower(),
            destination=destination_account,
        )
        self.transfers.append(transfer)
        logger.info(f"[MOCK PAYMENT] Transfer {transfer.transfer_id}: {amount} {currency} to {destination_account}")
        return transfer

    def verify_webhook(self, payload: bytes, signature: str, connect: bool = False) -> WebhookEvent:
        if signature != MOCK_WEBHOOK_SIGNATURE:
            raise PaymentException("Webhook signature verification failed")
        try:
            event = json.loads(payload)
            return WebhookEvent(
                event_id=event["id"],
                event_type=event["type"],
                data=event["data"]["object"],
                account=event.get("account"),
            )
        except (ValueError, KeyError) as e:
            raise PaymentException("Invalid webhook payload") from e
