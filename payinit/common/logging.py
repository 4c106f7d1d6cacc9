"""Structured JSON logging with request context fields."""

import logging
import sys
from contextvars import ContextVar
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from payinit.common.config import settings


CORRELATION_HEADER = "x-correlation-id"

trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")
transaction_id_ctx: ContextVar[str] = ContextVar("transaction_id", default="")


class ContextFilter(logging.Filter):
    """Inject service and correlation identifiers into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.trace_id = trace_id_ctx.get()
        record.transaction_id = transaction_id_ctx.get()
        return True


def bind_trace_id(headers) -> str:
    """Set the request trace id from the correlation header, or mint one.

    Must run on the event loop before the request is dispatched: values set
    inside a sync endpoint stay in its threadpool copy of the context.
    """

    trace_id = headers.get(CORRELATION_HEADER) or str(uuid4())
    trace_id_ctx.set(trace_id)
    return trace_id


def configure_logging() -> None:
    """Configure root and package loggers once per process."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(service_name)s %(trace_id)s %(transaction_id)s %(message)s"
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)
    # Propagated records skip logger filters; the handler filter covers those.
    handler.addFilter(ContextFilter())
    if not any(isinstance(f, ContextFilter) for f in logger.filters):
        logger.addFilter(ContextFilter())


logger = logging.getLogger("payinit")
