"""
Payment Provider Abstraction Layer
===================================

Unified interface for payment intents, products, Connect accounts and
transfers.
"""

from .factory import PaymentFactory
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
from .mock_provider import MockPaymentProvider
from .stripe_provider import StripeProvider


__all__ = [
    "PaymentProviderInterface",
    "PaymentIntent",
    "PaymentStatus",
    "ProviderProduct",
    "ConnectedAccount",
    "Transfer",
    "WebhookEvent",
    "PaymentException",
    "StripeProvider",
    "MockPaymentProvider",
    "PaymentFactory",
]
