"""
Mock Email Service
==================

Keeps outgoing messages in memory instead of sending them.
"""

import logging
from typing import List, Optional

from .interface import EmailMessage, EmailServiceInterface


logger = logging.getLogger(__name__)


class MockEmailService(EmailServiceInterface):
    """Email double for tests and local development."""

    def __init__(self):
        self.sent_messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        logger.info(f"[MOCK EMAIL] To: {message.to}, Subject: {message.subject}")
        self.sent_messages.append(message)
        return True

    def clear_sent_messages(self):
        self.sent_messages.clear()

    def get_last_message(self) -> Optional[EmailMessage]:
        return self.sent_messages[-1] if self.sent_messages else None
