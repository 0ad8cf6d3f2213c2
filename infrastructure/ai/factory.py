"""
AI Provider Factory
====================

Creates the provider selected by ``INFRASTRUCTURE["AI_PROVIDER"]``.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import AIProviderInterface
from .mock_provider import MockAIProvider
from .openai_provider import OpenAIProvider


logger = logging.getLogger(__name__)

AIBackend = Literal["openai", "mock"]


class AIFactory:
    @staticmethod
    def create(backend: AIBackend | None = None) -> AIProviderInterface:
        """
        Raises:
            ValueError: If backend type is invalid
        """
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("AI_PROVIDER", "openai")

        logger.info(f"Creating AI provider: {backend_type}")

        if backend_type == "openai":
            return OpenAIProvider()
        if backend_type == "mock":
            return MockAIProvider()
        raise ValueError(f"Invalid AI provider: {backend_type}. Must be 'openai' or 'mock'")
