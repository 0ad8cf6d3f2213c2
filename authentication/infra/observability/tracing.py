"""
OpenTelemetry Distributed Tracing

Configures OpenTelemetry for the whole project. Spans are exported over OTLP
when an endpoint is configured; Django requests are auto-instrumented.
"""

import logging
from functools import wraps
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(service_name: str = "codemart-backend", otlp_endpoint: str = "", enable: bool = True) -> None:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP/HTTP collector URL; spans are not exported when empty
        enable: Enable/disable tracing
    """
    global _initialized

    if _initialized:
        logger.debug("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    tracer_provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))
    trace.set_tracer_provider(tracer_provider)

    if otlp_endpoint:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
        logger.info(f"OTLP span export configured: {otlp_endpoint}")

    DjangoInstrumentor().instrument()

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")


def get_tracer(name: str = __name__) -> trace.Tracer:
    """
    Get tracer instance for creating custom spans.

    Example:
        tracer = get_tracer(__name__)

        with tracer.start_as_current_span("checkout.process_payment"):
            ...
    """
    return trace.get_tracer(name)


def add_span_attributes(span: trace.Span, **attributes) -> None:
    for key, value in attributes.items():
        span.set_attribute(key, str(value))


def trace_function(operation_name: Optional[str] = None):
    """
    Decorator to trace a function execution.

    Example:
        @trace_function("payout.execute")
        def execute_payout(self, payout_id):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            span_name = operation_name or f"{func.__module__}.{func.__name__}"
            with get_tracer(func.__module__).start_as_current_span(span_name):
                return func(*args, **kwargs)

        return wrapper

    return decorator
