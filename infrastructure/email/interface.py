"""
Email Service Interface
========================

Abstract base class defining the contract for transactional email.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class EmailMessage:
    """
    Represents an outgoing email.

    Attributes:
        subject: Email subject line
        body: Plain text body
        to: Recipient addresses
        from_email: Sender address (settings.DEFAULT_FROM_EMAIL when None)
        html_body: Optional HTML alternative
        tags: Free-form labels used in logs (e.g. "verify-email")
    """

    subject: str
    body: str
    to: List[str]
    from_email: Optional[str] = None
    html_body: Optional[str] = None
    tags: List[str] = field(default_factory=list)


class EmailServiceInterface(ABC):
    """
    Abstract interface for email operations.

    Concrete implementations:
        - SMTPEmailService: Django's configured email backend
        - MockEmailService: keeps messages in memory
    """

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Send a single email message.

        Returns:
            True if the backend accepted the message

        Raises:
            EmailException: If sending fails
        """

    def send_bulk(self, messages: List[EmailMessage]) -> int:
        """Send several messages; returns how many were accepted."""
        return sum(1 for message in messages if self.send(message))


class EmailException(Exception):
    """Base exception for email operations."""

    pass
