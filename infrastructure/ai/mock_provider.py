"""
Mock AI Provider
================

Canned code reviews for tests and local development.
"""

import logging
from typing import List, Optional, Tuple

from .interface import AIException, AIProviderInterface, CodeReview


logger = logging.getLogger(__name__)


def default_review() -> CodeReview:
    return CodeReview(
        security_score=80,
        maintainability_score=75,
        readability_score=90,
        security_suggestion="Escape user input before rendering it.",
        maintainability_suggestion="Split large components into smaller ones.",
        readability_suggestion="Name props after what they hold.",
        overall_description="Clean component with minor maintainability concerns.",
    )


class MockAIProvider(AIProviderInterface):
    """
    AI provider double.

    Set ``next_review`` to control the answer, or ``error`` to make the next
    calls fail. Every call is kept in ``calls``.
    """

    def __init__(self):
        self.calls: List[Tuple[str, str]] = []
        self.next_review: Optional[CodeReview] = None
        self.error: Optional[str] = None

    def review_code(self, code: str, language: str) -> CodeReview:
        self.calls.append((code, language))
        if self.error:
            raise AIException(self.error)
        logger.info(f"[MOCK AI] Reviewed {len(code)} characters of {language}")
        return self.next_review or default_review()
