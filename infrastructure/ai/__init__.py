"""
AI Provider Abstraction Layer
==============================

Language-model code review behind a swappable provider.
"""

from .factory import AIFactory
from .interface import AIException, AIProviderInterface, CodeReview
from .mock_provider import MockAIProvider
from .openai_provider import OpenAIProvider


__all__ = [
    "AIProviderInterface",
    "CodeReview",
    "AIException",
    "OpenAIProvider",
    "MockAIProvider",
    "AIFactory",
]
