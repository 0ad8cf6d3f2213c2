"""
Payment System Tasks Package

Celery tasks for the checkout pipeline, payouts and repository access.
"""

from .access_tasks import expire_repo_access_task
from .payment_tasks import process_payment_intent_task
from .payout_tasks import execute_payout_task


__all__ = [
    "process_payment_intent_task",
    "execute_payout_task",
    "expire_repo_access_task",
]
