"""
AI Provider Interface
======================

Contract for the language-model backed code review used by the code-check
endpoint.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Dict


SCORE_FIELDS = ("security_score", "maintainability_score", "readability_score")


@dataclass
class CodeReview:
    """
    Quality review of a code snippet. Scores run from 0 (worst) to 100.
    """

    security_score: int
    maintainability_score: int
    readability_score: int
    security_suggestion: str
    maintainability_suggestion: str
    readability_suggestion: str
    overall_description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodeReview":
        """
        Build a review from model output.

        Raises:
            AIException: If a field is missing or a score is out of range
        """
        missing = [f.name for f in fields(cls) if f.name not in data]
        if missing:
            raise AIException(f"Review is missing fields: {', '.join(missing)}")

        values = {}
        for f in fields(cls):
            value = data[f.name]
            if f.name in SCORE_FIELDS:
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise AIException(f"{f.name} is not a number") from e
                if not 0 <= value <= 100:
                    raise AIException(f"{f.name} must be between 0 and 100")
            else:
                value = str(value)
            values[f.name] = value
        return cls(**values)


class AIProviderInterface(ABC):
    """Abstract interface for language-model providers."""

    @abstractmethod
    def review_code(self, code: str, language: str) -> CodeReview:
        """
        Score a snippet for security, maintainability and readability.

        Args:
            code: Source code to review
            language: Source language label (e.g. "JSX")

        Raises:
            AIException: If the provider fails or returns an unusable review
        """
        pass


class AIException(Exception):
    """Base exception for AI provider operations."""

    pass
