import logging

from infrastructure.events import get_event_bus
from payment_system.infra.observability import metrics


logger = logging.getLogger(__name__)


def handle_order_paid(event_data):
    payload = event_data.get("payload", {})
    logger.info(
        f"[Payment Listener] Order {payload.get('order_id')} paid: "
        f"{payload.get('amount')} {payload.get('currency', '').upper()} to seller {payload.get('seller_id')}"
    )


def handle_payout_requested(event_data):
    """Handle payout.requested event: keep the review-queue gauge in step."""
    payload = event_data.get("payload", {})
    metrics.pending_payout_requests.inc()
    logger.info(
        f"[Payment Listener] Seller {payload.get('seller_id')} requested a payout of {payload.get('amount')}"
    )


def handle_payout_processed(event_data):
    payload = event_data.get("payload", {})
    metrics.pending_payout_requests.dec()
    logger.info(
        f"[Payment Listener] Payout request {payload.get('payout_request_id')} marked {payload.get('status')}"
    )


def register_payment_listeners():
    """Register all payment event listeners."""
    event_bus = get_event_bus()
    event_bus.subscribe("order.paid", handle_order_paid)
    event_bus.subscribe("payout.requested", handle_payout_requested)
    event_bus.subscribe("payout.processed", handle_payout_processed)
    logger.info("Payment event listeners registered")
