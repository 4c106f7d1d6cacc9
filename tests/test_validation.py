"""Unit tests for amount bounds and record construction."""

import pytest
from pydantic import ValidationError

from payinit.services.payment.errors import ErrorKind, InvalidPaymentRequest
from payinit.services.payment.schemas import PaymentMethod, PaymentRequest
from payinit.services.payment.service import build_payment_record, validate_payment_request


@pytest.mark.parametrize("amount", [1.0, 250.75, 1_000_000.0])
def test_amount_within_bounds_passes(amount):
    validate_payment_request(PaymentRequest(amount=amount, payment_method=PaymentMethod.BANK))


@pytest.mark.parametrize("amount", [0.5, 0.999, 1_000_000.01, -10.0, float("nan"), float("inf")])
def test_amount_out_of_range_rejected(amount):
    """Bounds are inclusive; anything outside, NaN included, is invalid input."""

    req = PaymentRequest(amount=amount, payment_method=PaymentMethod.TRUEMONEY)
    with pytest.raises(InvalidPaymentRequest) as excinfo:
        validate_payment_request(req)
    assert excinfo.value.kind is ErrorKind.INVALID_INPUT
    assert excinfo.value.reason == "out_of_range"


def test_unknown_payment_method_fails_parsing():
    with pytest.raises(ValidationError):
        PaymentRequest(amount=10.0, payment_method="crypto")


def test_payment_method_is_case_sensitive():
    with pytest.raises(ValidationError):
        PaymentRequest(amount=10.0, payment_method="Bank")


def test_build_record_is_pending_with_lowercase_method():
    req = PaymentRequest(amount=42.5, payment_method="truemoney")
    record = build_payment_record(req)

    assert record.status == "pending"
    assert record.amount == 42.5
    assert record.payment_method == "truemoney"
    assert len(record.transaction_id) == 36


def test_build_record_assigns_fresh_ids():
    req = PaymentRequest(amount=10.0, payment_method="bank")
    ids = {build_payment_record(req).transaction_id for _ in range(1000)}
    assert len(ids) == 1000
