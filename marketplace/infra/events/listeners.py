import logging

from infrastructure.events import get_event_bus


logger = logging.getLogger(__name__)


def handle_user_banned(event_data):
    """Handle user.banned event: hide the banned seller's listings."""
    try:
        from infrastructure.container import container

        payload = event_data.get("payload", {})
        user_id = payload.get("user_id")
        hidden = container.catalog_service().ban_user_repos(user_id)
        logger.info(f"[Marketplace Listener] User {user_id} banned, {hidden} repos hidden")
    except Exception as e:
        logger.error(f"Error handling user.banned event: {e}")


def handle_content_flagged(event_data):
    payload = event_data.get("payload", {})
    logger.info(
        f"[Marketplace Listener] {payload.get('kind')} {payload.get('object_id')} flagged as {payload.get('flag')}"
    )


def handle_access_granted(event_data):
    payload = event_data.get("payload", {})
    logger.info(f"[Marketplace Listener] User {payload.get('user_id')} can now access repo {payload.get('repo_id')}")


def register_marketplace_listeners():
    """Register all marketplace event listeners."""
    event_bus = get_event_bus()
    event_bus.subscribe("user.banned", handle_user_banned)
    event_bus.subscribe("content.flagged", handle_content_flagged)
    event_bus.subscribe("repo.access_granted", handle_access_granted)
    logger.info("Marketplace event listeners registered")
