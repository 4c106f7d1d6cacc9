"""Payment initiation pipeline.

Validates a parsed request, builds the pending record, and hands it to the
store. Every failure leaves through a `PaymentError` subclass.
"""

import math
from uuid import uuid4

from payinit.common.config import settings
from payinit.common.logging import logger, transaction_id_ctx
from payinit.common.tracing import annotate_current_span
from payinit.services.payment.errors import InvalidPaymentRequest, PaymentError
from payinit.services.payment.models import PENDING, PaymentRecord
from payinit.services.payment.schemas import PaymentRequest, PaymentResponse
from payinit.services.payment.store import PaymentStore


def validate_payment_request(req: PaymentRequest) -> None:
    """Raise `InvalidPaymentRequest` when the amount is outside the accepted range."""

    low, high = settings.payment_amount_min, settings.payment_amount_max
    if not math.isfinite(req.amount) or not low <= req.amount <= high:
        raise InvalidPaymentRequest(
            f"amount {req.amount} outside [{low}, {high}]",
            reason="out_of_range",
        )


def build_payment_record(req: PaymentRequest) -> PaymentRecord:
    """Assign a fresh random transaction id and mark the record pending."""

    return PaymentRecord(
        transaction_id=str(uuid4()),
        amount=req.amount,
        payment_method=req.payment_method.value,
        status=PENDING,
    )


class PaymentService:
    """Runs validate -> build -> persist for one request at a time."""

    def __init__(self, store: PaymentStore) -> None:
        self.store = store

    def initiate(self, req: PaymentRequest) -> PaymentResponse:
        validate_payment_request(req)
        record = build_payment_record(req)
        token = transaction_id_ctx.set(record.transaction_id)
        annotate_current_span(transaction_id=record.transaction_id, method=record.payment_method)
        try:
            self.store.insert(record)
            logger.info(
                "payment_persisted transaction_id=%s method=%s amount=%s",
                record.transaction_id,
                record.payment_method,
                record.amount,
            )
        except PaymentError:
            raise
        except Exception as exc:
            logger.exception("payment_initiate_internal_error")
            raise PaymentError(f"unexpected {type(exc).__name__}") from exc
        finally:
            transaction_id_ctx.reset(token)
        return PaymentResponse(status=record.status, amount=record.amount)
