"""
Payout Celery Tasks

Sends approved payouts to the payment provider.
"""

import logging

from celery import shared_task


logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=5, queue="payment_tasks")
def execute_payout_task(self, payout_id):
    """
    Transfer an approved payout to the seller's connected account.

    Provider errors leave the payout FAILED and are retried with
    exponential backoff.

    Args:
        payout_id (str): The UUID of the Payout

    Returns:
        dict: Transfer result
    """
    from infrastructure.container import container
    from infrastructure.payments.interface import PaymentException
    from payment_system.models import Payout

    payout = Payout.objects.select_related("seller_profile").filter(id=payout_id).first()
    if payout is None:
        logger.warning(f"Payout {payout_id} not found")
        return {"success": False, "error": "Payout not found", "payout_id": payout_id}

    try:
        result = container.payout_service().execute_payout(payout)
    except PaymentException as e:
        logger.error(f"Transfer for payout {payout_id} failed: {e}")
        try:
            raise self.retry(countdown=60 * (2**self.request.retries))
        except self.MaxRetriesExceededError:
            logger.error(f"Max retries exceeded for payout {payout_id}, left as FAILED")
            return {"success": False, "error": str(e), "payout_id": payout_id}

    if not result.ok:
        logger.warning(f"Payout {payout_id} not sent: {result.error_detail}")
        return {"success": False, "error": result.error, "detail": result.error_detail, "payout_id": payout_id}

    logger.info(f"Payout {payout_id} sent as transfer {result.value.stripe_payout_id}")
    return {"success": True, "payout_id": payout_id, "transfer_id": result.value.stripe_payout_id}
