"""Prometheus metric definitions for the payment service."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


payment_requests_total = Counter("payment_requests_total", "Total payment initiation requests", ["service"])
payment_success_total = Counter("payment_success_total", "Total payments recorded as pending", ["service"])
payment_failure_total = Counter(
    "payment_failure_total",
    "Total rejected payment initiation requests",
    ["service", "kind"],
)
payment_latency_seconds = Histogram("payment_latency_seconds", "Payment initiation latency seconds", ["service"])
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
