"""OpenTelemetry setup for the payment API."""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from payinit.common.config import settings


# Liveness and scrape endpoints are not traced.
UNTRACED_URLS = "health-check,metrics"


def setup_tracing(service_name: str) -> None:
    """Register a tracer provider exporting over OTLP HTTP, unless disabled."""

    if not settings.tracing_enabled:
        return
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)))
    trace.set_tracer_provider(provider)


def instrument_app(app: FastAPI) -> None:
    """Attach FastAPI auto-instrumentation for payment request spans."""

    if settings.tracing_enabled:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)


def annotate_current_span(**attributes) -> None:
    """Copy payment identifiers onto the active request span, if any."""

    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(f"payment.{key}", value)
