"""
Transaction Utilities for CodeMart Backend
==========================================

Transaction helpers for the money-moving paths (checkout confirmation,
payout requests, payout processing). Isolation levels are applied on MySQL
and PostgreSQL; other backends run with their default isolation.

Usage Examples:
    with atomic_with_isolation("READ COMMITTED"):
        order = Order.objects.create(...)

    @financial_transaction
    def process_payment(self, payment_intent_id):
        ...
"""

import logging
import time
from contextlib import contextmanager
from functools import wraps

from django.db import IntegrityError, OperationalError, connections, transaction


logger = logging.getLogger(__name__)

ISOLATION_LEVELS = {
    "READ_UNCOMMITTED": "READ UNCOMMITTED",
    "READ_COMMITTED": "READ COMMITTED",
    "REPEATABLE_READ": "REPEATABLE READ",
    "SERIALIZABLE": "SERIALIZABLE",
}

# Backends that accept SET ... TRANSACTION ISOLATION LEVEL
_ISOLATION_VENDORS = {"mysql": "SET SESSION TRANSACTION ISOLATION LEVEL", "postgresql": "SET TRANSACTION ISOLATION LEVEL"}


class TransactionError(Exception):
    """Raised when a database transaction cannot be completed."""

    pass


class DeadlockError(TransactionError):
    """Raised when a deadlock persists after all retries."""

    pass


def set_isolation_level(level="READ COMMITTED", using="default"):
    """
    Set the transaction isolation level for the current connection.

    No-op on backends without isolation control (sqlite in tests).
    """
    if level not in ISOLATION_LEVELS.values():
        raise ValueError(f"Invalid isolation level: {level}. Must be one of {list(ISOLATION_LEVELS.values())}")

    conn = connections[using]
    statement = _ISOLATION_VENDORS.get(conn.vendor)
    if statement is None:
        logger.debug(f"Isolation level not supported on {conn.vendor}, keeping default")
        return

    try:
        with conn.cursor() as cursor:
            cursor.execute(f"{statement} {level}")
        logger.debug(f"Set transaction isolation level to {level}")
    except Exception as e:
        logger.error(f"Failed to set isolation level to {level}: {e}")
        raise TransactionError(f"Could not set isolation level: {e}") from e


@contextmanager
def atomic_with_isolation(isolation_level="READ COMMITTED", using="default", savepoint=True):
    """
    Atomic block with an explicit isolation level.

    Database integrity and operational errors are re-raised as TransactionError.
    """
    try:
        with transaction.atomic(using=using, savepoint=savepoint):
            # Only the outermost block may change the isolation level
            if not connections[using].savepoint_ids:
                set_isolation_level(isolation_level, using=using)
            yield
    except (IntegrityError, OperationalError) as e:
        logger.error(f"Database error in transaction: {e}")
        raise TransactionError(f"Transaction failed: {e}") from e


def _is_deadlock(exc: Exception) -> bool:
    message = str(exc)
    return "Deadlock found" in message or "1213" in message or "deadlock detected" in message


def retry_on_deadlock(max_retries=3, delay=0.1, backoff=2.0):
    """
    Retry the wrapped callable when the database reports a deadlock.

    Args:
        max_retries: Retry attempts after the first failure
        delay: Initial delay between attempts in seconds
        backoff: Multiplier applied to the delay after each attempt
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            current_delay = delay
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except (OperationalError, TransactionError) as e:
                    cause = e.__cause__ or e
                    if not _is_deadlock(cause):
                        raise
                    if attempt == max_retries:
                        raise DeadlockError(f"Deadlock persisted after {max_retries} retries: {cause}") from e
                    logger.warning(
                        f"Deadlock detected in {func.__name__}, retrying in {current_delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper

    return decorator


def log_transaction_performance(func):
    """Log how long the wrapped transaction took."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            logger.info(f"Transaction {func.__name__} completed in {time.time() - start_time:.3f}s")
            return result
        except Exception as e:
            logger.error(f"Transaction {func.__name__} failed after {time.time() - start_time:.3f}s: {e}")
            raise

    return wrapper


def financial_transaction(func):
    """
    Wrap a money-moving operation: READ COMMITTED atomic block, deadlock
    retry and timing logs. Rows that must not change underneath the
    operation are locked with ``select_for_update`` inside the body.
    """

    @wraps(func)
    def atomic_wrapper(*args, **kwargs):
        with atomic_with_isolation("READ COMMITTED"):
            return func(*args, **kwargs)

    return log_transaction_performance(retry_on_deadlock()(atomic_wrapper))
