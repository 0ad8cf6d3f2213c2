import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class PaymentSystemConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payment_system"
    verbose_name = "Payment System"

    def ready(self):
        """Register event listeners (must run in all processes, workers included)."""
        try:
            from payment_system.infra.events.listeners import register_payment_listeners

            register_payment_listeners()
        except Exception as e:
            logger.error(f"Failed to register payment listeners: {e}")
