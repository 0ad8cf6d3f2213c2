"""
Provider webhooks.

Signatures are verified by the payment provider before anything is read
from the payload. Handled events are acknowledged with 200; processing
happens in Celery or in the owning service.
"""

import logging

from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import OpenApiResponse, OpenApiTypes, extend_schema

from infrastructure.container import container
from infrastructure.payments.interface import PaymentException
from payment_system.infra.observability import metrics


logger = logging.getLogger(__name__)

PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
ACCOUNT_UPDATED = "account.updated"


def _client_ip(request):
    return request.META.get("HTTP_X_FORWARDED_FOR", "").split(",")[0] or request.META.get("REMOTE_ADDR", "unknown")


class ProviderWebhookView(View):
    """Verify the signature, then hand the event to ``handle_event``."""

    connect = False

    def post(self, request):
        sig_header = request.headers.get("stripe-signature")
        client_ip = _client_ip(request)

        if not sig_header:
            logger.warning(f"Webhook rejected: missing stripe-signature header from IP {client_ip}")
            return HttpResponse(status=400, content=b"Missing stripe-signature header")

        try:
            event = container.payment().verify_webhook(request.body, sig_header, connect=self.connect)
        except PaymentException as e:
            logger.warning(f"Webhook verification failed from IP {client_ip}: {e}")
            return HttpResponse(status=400, content=f"Webhook verification failed: {e}".encode("utf-8"))

        logger.info(f"Received provider event {event.event_id} ({event.event_type})")
        handled = self.handle_event(event)
        metrics.webhook_events_total.labels(event_type=event.event_type, handled=str(handled).lower()).inc()

        message = "processed" if handled else "received but not processed"
        return HttpResponse(status=200, content=f"{event.event_type} event {message}".encode("utf-8"))

    def handle_event(self, event) -> bool:
        raise NotImplementedError


@method_decorator(csrf_exempt, name="dispatch")
class PaymentWebhookView(ProviderWebhookView):
    """Buyer payment events."""

    @extend_schema(
        operation_id="payment_webhook",
        summary="Payment webhook endpoint",
        description="Receives provider payment events. Succeeded intents are confirmed asynchronously.",
        request=OpenApiTypes.OBJECT,
        responses={
            200: OpenApiResponse(description="Event acknowledged"),
            400: OpenApiResponse(description="Invalid payload or signature"),
        },
        tags=["Webhooks"],
        auth=[],
    )
    def post(self, request):
        return super().post(request)

    def handle_event(self, event) -> bool:
        if event.event_type != PAYMENT_INTENT_SUCCEEDED:
            return False

        from payment_system.Tasks.payment_tasks import process_payment_intent_task

        intent_id = event.data.get("id")
        if not intent_id:
            logger.warning(f"Event {event.event_id} has no payment intent id")
            return False

        process_payment_intent_task.delay(intent_id)
        logger.info(f"Queued confirmation of payment intent {intent_id}")
        return True


@method_decorator(csrf_exempt, name="dispatch")
class ConnectWebhookView(ProviderWebhookView):
    """Connected (seller) account events."""

    connect = True

    @extend_schema(
        operation_id="payment_webhook_connect",
        summary="Connect webhook endpoint",
        description="Receives connected account events and syncs seller verification status.",
        request=OpenApiTypes.OBJECT,
        responses={
            200: OpenApiResponse(description="Event acknowledged"),
            400: OpenApiResponse(description="Invalid payload or signature"),
        },
        tags=["Webhooks"],
        auth=[],
    )
    def post(self, request):
        return super().post(request)

    def handle_event(self, event) -> bool:
        if event.event_type != ACCOUNT_UPDATED:
            return False

        account_id = event.data.get("id") or event.account
        result = container.onboarding_service().handle_onboarding_complete(account_id)
        if not result.success:
            # Still acknowledged: the provider retrying will not create the profile
            logger.warning(f"account.updated for {account_id} not applied: {result.error}")
            return False
        return True
