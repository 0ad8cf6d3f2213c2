"""
Payment System Celery Tasks

Confirms payment intents reported as succeeded by the provider webhook.
"""

import logging

from celery import shared_task


logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, queue="payment_tasks")
def process_payment_intent_task(self, intent_id):
    """
    Run the checkout pipeline for a succeeded payment intent.

    Safe to run more than once for the same intent: the pipeline is
    idempotent on the intent id.

    Args:
        intent_id (str): Provider payment intent ID

    Returns:
        dict: Processing result including the order ID
    """
    from infrastructure.container import container
    from utils.service_base import ErrorCodes

    retryable = (ErrorCodes.PAYMENT_PROVIDER_ERROR, ErrorCodes.DATABASE_ERROR)

    try:
        logger.info(f"Processing payment intent {intent_id}")
        result = container.checkout_service().process_payment(intent_id)
    except Exception as e:
        logger.error(f"Error processing payment intent {intent_id}: {e}", exc_info=True)
        raise self.retry(exc=e, countdown=60 * (2**self.request.retries))

    if result.ok:
        return {"success": True, "intent_id": intent_id, "order_id": result.value["order_id"]}

    if result.error in retryable:
        logger.warning(f"Payment intent {intent_id} failed with {result.error}, retrying")
        try:
            raise self.retry(countdown=60 * (2**self.request.retries))
        except self.MaxRetriesExceededError:
            logger.error(f"Max retries exceeded for payment intent {intent_id}")

    logger.warning(f"Payment intent {intent_id} not processed: {result.error_detail}")
    return {"success": False, "intent_id": intent_id, "error": result.error, "detail": result.error_detail}
