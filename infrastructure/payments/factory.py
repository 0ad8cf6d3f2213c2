"""
Payment Provider Factory
=========================

Creates the payment provider selected by ``INFRASTRUCTURE["PAYMENT_PROVIDER"]``.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import PaymentProviderInterface
from .mock_provider import MockPaymentProvider
from .stripe_provider import StripeProvider


logger = logging.getLogger(__name__)

PaymentBackend = Literal["stripe", "mock"]


class PaymentFactory:
    """
    Factory for creating payment provider instances.

    Usage:
        # In settings.py
        INFRASTRUCTURE = {"PAYMENT_PROVIDER": "stripe"}  # or "mock"

        # In your code
        payment_provider = PaymentFactory.create()
    """

    @staticmethod
    def create(backend: PaymentBackend | None = None) -> PaymentProviderInterface:
        """
        Create a payment provider instance.

        Raises:
            ValueError: If backend type is invalid
        """
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("PAYMENT_PROVIDER", "stripe")

        logger.info(f"Creating payment provider: {backend_type}")

        if backend_type == "stripe":
            return StripeProvider()
        if backend_type == "mock":
            return MockPaymentProvider()
        raise ValueError(f"Invalid payment provider: {backend_type}. Must be 'stripe' or 'mock'")
