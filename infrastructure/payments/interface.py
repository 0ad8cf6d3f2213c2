"""
Payment Provider Interface
===========================

Abstract base class defining the contract for the payment operations the
marketplace needs: buyer payment intents, catalog products, seller
connected accounts, transfers to sellers, and webhook verification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PaymentStatus(str, Enum):
    """Payment status enumeration."""

    PENDING = "pending"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"


@dataclass
class PaymentIntent:
    """
    Represents a payment intent.

    Attributes:
        intent_id: Unique payment intent identifier
        amount: Amount in major currency units (e.g. 12.50)
        currency: ISO currency code (lowercase)
        status: Normalized payment status
        raw_status: Provider status string (e.g. "requires_payment_method")
        client_secret: Secret handed to the browser to confirm the payment
        customer_email: Receipt email, when known
        metadata: Custom data attached at creation
    """

    intent_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    raw_status: str = ""
    client_secret: Optional[str] = None
    customer_email: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProviderProduct:
    """A sellable product and its default price at the provider."""

    product_id: str
    price_id: str


@dataclass
class ConnectedAccount:
    """
    A seller's connected account at the provider.

    Attributes:
        account_id: Provider account identifier
        details_submitted: Seller finished the hosted onboarding form
        charges_enabled: Account may accept charges
        payouts_enabled: Account may receive transfers
    """

    account_id: str
    details_submitted: bool = False
    charges_enabled: bool = False
    payouts_enabled: bool = False

    @property
    def is_fully_onboarded(self) -> bool:
        return self.details_submitted and self.charges_enabled


@dataclass
class Transfer:
    transfer_id: str
    amount: Decimal
    currency: str
    destination: str


@dataclass
class WebhookEvent:
    """
    Represents a verified webhook event from the payment provider.

    Attributes:
        event_id: Unique event identifier
        event_type: Type of event (e.g., 'payment_intent.succeeded')
        data: The event's object payload
        account: Connected account the event belongs to (Connect events)
    """

    event_id: str
    event_type: str
    data: Dict[str, Any]
    account: Optional[str] = None


class PaymentProviderInterface(ABC):
    """
    Abstract interface for payment provider operations.

    Concrete implementations:
        - StripeProvider: Stripe payments and Connect
        - MockPaymentProvider: in-memory provider for tests and local runs
    """

    @abstractmethod
    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        """
        Create a payment intent the buyer confirms client-side.

        Args:
            amount: Amount in major currency units
            currency: ISO currency code
            metadata: Custom data (repo_id, seller_id, user_id)
            customer_email: Receipt email

        Raises:
            PaymentException: If creation fails
        """

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """
        Retrieve payment intent details.

        Raises:
            PaymentException: If retrieval fails
        """

    @abstractmethod
    def create_product(
        self,
        name: str,
        description: str,
        price: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderProduct:
        """
        Register a catalog product and its price.

        Raises:
            PaymentException: If creation fails
        """

    @abstractmethod
    def create_connect_account(self, email: str, business_name: str, business_type: str) -> ConnectedAccount:
        """
        Create a connected account for a seller.

        Raises:
            PaymentException: If creation fails
        """

    @abstractmethod
    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        """
        Create a hosted onboarding link for a connected account.

        Returns:
            URL the seller is redirected to

        Raises:
            PaymentException: If creation fails
        """

    @abstractmethod
    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        """
        Retrieve a connected account's onboarding state.

        Raises:
            PaymentException: If retrieval fails
        """

    @abstractmethod
    def create_transfer(
        self,
        amount: Decimal,
        currency: str,
        destination_account: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Transfer:
        """
        Move funds to a connected account (seller payout).

        Raises:
            PaymentException: If transfer fails
        """

    @abstractmethod
    def verify_webhook(self, payload: bytes, signature: str, connect: bool = False) -> WebhookEvent:
        """
        Verify and parse a webhook event.

        Args:
            payload: Raw webhook payload bytes
            signature: Signature header value
            connect: Verify with the Connect endpoint secret

        Raises:
            PaymentException: If verification fails or signature is invalid
        """


class PaymentException(Exception):
    """Base exception for payment operations."""

    pass
