"""
Email Service Factory
======================

Creates the email service selected by ``INFRASTRUCTURE["EMAIL_BACKEND_TYPE"]``.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import EmailServiceInterface
from .mock_service import MockEmailService
from .smtp_service import SMTPEmailService


logger = logging.getLogger(__name__)

EmailBackend = Literal["smtp", "mock"]


class EmailFactory:
    """
    Factory for creating email service instances.

    Defaults to "mock" while running tests, "smtp" otherwise.
    """

    @staticmethod
    def create(backend: EmailBackend | None = None) -> EmailServiceInterface:
        is_testing = getattr(settings, "TESTING", False)
        default_backend = "mock" if is_testing else "smtp"
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})

        backend_type = backend or infrastructure.get("EMAIL_BACKEND_TYPE", default_backend)

        logger.info(f"Creating email service backend: {backend_type}")

        if backend_type == "smtp":
            return SMTPEmailService()
        if backend_type == "mock":
            return MockEmailService()
        raise ValueError(f"Invalid email backend: {backend_type}. Must be 'smtp' or 'mock'")
