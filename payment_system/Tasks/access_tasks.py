"""
Repository access maintenance tasks (scheduled by Celery beat).
"""

import logging

from celery import shared_task


logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, queue="marketplace_tasks")
def expire_repo_access_task(self):
    """Delete repository access grants whose expiry has passed."""
    from infrastructure.container import container

    try:
        expired = container.access_service().expire_access()
    except Exception as e:
        logger.error(f"Error expiring repository access: {e}")
        raise self.retry(exc=e, countdown=60 * (2**self.request.retries))

    logger.info(f"Expired {expired} repository access grants")
    return {"success": True, "expired": expired}
