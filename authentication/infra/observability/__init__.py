"""
Observability Infrastructure

OpenTelemetry tracing and Prometheus metrics for authentication.
"""

from .metrics import login_duration, login_failed, login_total, seller_applications_total
from .tracing import get_tracer, setup_tracing, trace_function

__all__ = [
    "setup_tracing",
    "get_tracer",
    "trace_function",
    "login_total",
    "login_failed",
    "login_duration",
    "seller_applications_total",
]
