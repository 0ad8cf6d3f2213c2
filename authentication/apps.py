import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """
        Initialize authentication context.
        """
        from django.conf import settings

        from authentication.infra.events.listeners import register_authentication_listeners
        from authentication.infra.observability.tracing import setup_tracing
        from infrastructure.events import get_event_bus

        register_authentication_listeners()
        if not getattr(settings, "TESTING", False):
            # Redis subscriber thread; one per process
            get_event_bus().start_listening()

        setup_tracing(
            service_name=settings.OTEL_SERVICE_NAME,
            otlp_endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            enable=settings.OTEL_ENABLED,
        )
