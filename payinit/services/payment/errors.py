"""Payment error taxonomy and its mapping to HTTP responses."""

from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from payinit.common.config import settings
from payinit.common.logging import logger
from payinit.common.metrics import payment_failure_total
from payinit.services.payment.schemas import ErrorBody


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    INTERNAL = "internal"


class PaymentError(Exception):
    """Base class for failures that terminate a payment request."""

    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidPaymentRequest(PaymentError):
    """Payload could not be parsed or broke a field constraint."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, detail: str = "", reason: str = "invalid") -> None:
        super().__init__(detail)
        self.reason = reason


class StoreError(PaymentError):
    """The payment store rejected or could not complete a write."""

    kind = ErrorKind.STORAGE_UNAVAILABLE


BAD_REQUEST = (400, ErrorBody(message="Bad Request", code="P001"))

# Wire-compatible mapping: every failure surfaces as P001.
COMPAT_MAPPING: dict[ErrorKind, tuple[int, ErrorBody]] = {kind: BAD_REQUEST for kind in ErrorKind}

DETAILED_MAPPING: dict[ErrorKind, tuple[int, ErrorBody]] = {
    ErrorKind.INVALID_INPUT: BAD_REQUEST,
    ErrorKind.STORAGE_UNAVAILABLE: (503, ErrorBody(message="Service Unavailable", code="P002")),
    ErrorKind.INTERNAL: (500, ErrorBody(message="Internal Server Error", code="P003")),
}


def map_error(error: PaymentError, mode: str | None = None) -> tuple[int, ErrorBody]:
    """Translate a payment error into `(status_code, body)`."""

    mapping = DETAILED_MAPPING if (mode or settings.error_mapping) == "detailed" else COMPAT_MAPPING
    return mapping[error.kind]


def error_response(error: PaymentError) -> JSONResponse:
    """Log, count, and render one failed request."""

    logger.warning("payment_rejected kind=%s detail=%s", error.kind.value, error.detail)
    payment_failure_total.labels(service=settings.service_name, kind=error.kind.value).inc()
    status_code, body = map_error(error)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _payment_error_handler(_: Request, exc: PaymentError) -> JSONResponse:
    return error_response(exc)


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON, missing fields and unknown payment methods all land here.
    fields = ",".join(".".join(str(part) for part in err.get("loc", ())) for err in exc.errors())
    return error_response(InvalidPaymentRequest(f"payload rejected at {fields}", reason="malformed"))


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Undecodable bodies surface from the body parser as a bare 400.
    if exc.status_code == 400:
        return error_response(InvalidPaymentRequest(str(exc.detail), reason="malformed"))
    return await http_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Route request-parsing and payment failures through `map_error`."""

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(PaymentError, _payment_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
