import logging

from infrastructure.events import get_event_bus


logger = logging.getLogger(__name__)


def register_authentication_listeners():
    """
    Register all event listeners for authentication context.
    Called when Django app starts.
    """
    event_bus = get_event_bus()

    event_bus.subscribe("user.registered", log_user_registration)
    event_bus.subscribe("user.banned", log_user_banned)
    event_bus.subscribe("seller.status_changed", log_seller_status_change)

    logger.info("Authentication event listeners registered")


def log_user_registration(event):
    """Log user registration event."""
    # event is the full envelope including 'payload'
    payload = event.get("payload", {})
    logger.info(f"[LISTENER] User registered: {payload.get('email')} ({payload.get('user_id')})")


def log_user_banned(event):
    payload = event.get("payload", {})
    logger.info(f"[LISTENER] User banned: {payload.get('user_id')} until {payload.get('banned_until')}")


def log_seller_status_change(event):
    payload = event.get("payload", {})
    logger.info(f"[LISTENER] Seller {payload.get('user_id')} is now {payload.get('status')}")
