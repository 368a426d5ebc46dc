"""
OpenTelemetry Distributed Tracing

Configures the OpenTelemetry SDK tracer provider and Django auto-instrumentation.
Spans go to the console exporter when OTEL_EXPORTER=console; with any other
exporter value the spans are recorded but not exported.
"""

import logging

from opentelemetry import trace
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_initialized = False

# Proxy tracer; spans are recorded once setup_tracing installs a provider
tracer = trace.get_tracer("bazaar")


def setup_tracing(service_name: str = "bazaar-backend", exporter: str = "none", enable: bool = True) -> None:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service reported on every span
        exporter: "console" to print finished spans, anything else to keep them in-process
        enable: Enable/disable tracing

    Example:
        setup_tracing(service_name="bazaar-backend", exporter="console")
    """
    global _initialized

    if _initialized:
        logger.warning("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    resource = Resource(attributes={SERVICE_NAME: service_name})
    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    if exporter == "console":
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console span exporter configured")

    # Auto-instrument Django (traces all HTTP requests)
    DjangoInstrumentor().instrument()
    logger.info("Django auto-instrumentation enabled")

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")

