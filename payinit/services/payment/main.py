"""HTTP surface for payment initiation.

Serves the liveness probe and `POST /payment/initiate`; the payment store is
built once in the app lifespan and shared by every request.
"""

from contextlib import asynccontextmanager
from time import perf_counter

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from sqlalchemy.exc import SQLAlchemyError

from payinit.common.config import settings
from payinit.common.db import make_engine
from payinit.common.logging import bind_trace_id, configure_logging, logger
from payinit.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
    payment_latency_seconds,
    payment_requests_total,
    payment_success_total,
)
from payinit.common.startup import log_startup_config
from payinit.common.tracing import instrument_app, setup_tracing
from payinit.services.payment.errors import register_exception_handlers
from payinit.services.payment.schemas import PaymentRequest, PaymentResponse
from payinit.services.payment.service import PaymentService
from payinit.services.payment.store import PaymentStore

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings.service_name,
    ["SERVICE_NAME", "DATABASE_URL", "ERROR_MAPPING", "HOST", "PORT"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared payment store for the lifetime of the app."""

    store = PaymentStore(make_engine())
    if settings.db_create_schema:
        try:
            store.create_schema()
        except SQLAlchemyError as exc:
            # Inserts then fail with StoreError; liveness is unaffected.
            logger.error("schema_create_failed error=%s", exc)
    app.state.payment_service = PaymentService(store)
    yield
    store.close()


INITIATE_PATH = "/payment/initiate"

app = FastAPI(title="Payment Initiation Service", lifespan=lifespan)
instrument_app(app)
register_exception_handlers(app)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Bind the trace id, then record request count and latency for every HTTP call."""

    start = perf_counter()
    bind_trace_id(request.headers)
    route = request.url.path
    method = request.method
    if (method, route) == ("POST", INITIATE_PATH):
        # Counted before parsing so rejected payloads are included.
        payment_requests_total.labels(service=settings.service_name).inc()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service


@app.post(INITIATE_PATH, response_model=PaymentResponse)
def initiate_payment(
    req: PaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Validate the request and record it as a pending payment."""

    with payment_latency_seconds.labels(service=settings.service_name).time():
        response = service.initiate(req)
    payment_success_total.labels(service=settings.service_name).inc()
    return response


@app.get("/health-check")
def health_check():
    """Liveness probe; never touches the store."""

    return Response(status_code=200)


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


def run() -> None:
    """Console entrypoint: serve the app on the configured bind address."""

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
