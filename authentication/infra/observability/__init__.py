"""
Observability Infrastructure

OpenTelemetry tracing and Prometheus metrics for the authentication service.
"""

from .metrics import login_duration, login_failed, login_total, signup_total, user_admin_actions_total
from .tracing import setup_tracing, tracer

__all__ = [
    "setup_tracing",
    "tracer",
    "login_total",
    "login_failed",
    "login_duration",
    "signup_total",
    "user_admin_actions_total",
]
