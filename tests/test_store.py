"""Payment store insert contract against SQLite."""

import pytest

from payinit.services.payment.errors import StoreError
from payinit.services.payment.models import PaymentRecord

from conftest import sqlite_store


def test_insert_persists_record(store, stored_payments):
    record = PaymentRecord(transaction_id="3f1c", amount=99.5, payment_method="bank")
    outcome = store.insert(record)

    assert outcome.inserted_id == "3f1c"
    rows = stored_payments()
    assert [(r.transaction_id, r.amount, r.payment_method, r.status) for r in rows] == [
        ("3f1c", 99.5, "bank", "pending")
    ]


def test_duplicate_transaction_id_raises_store_error(store):
    record = PaymentRecord(transaction_id="dup", amount=5.0, payment_method="truemoney")
    store.insert(record)
    with pytest.raises(StoreError):
        store.insert(record)


def test_missing_table_raises_store_error():
    broken = sqlite_store(create_schema=False)
    try:
        with pytest.raises(StoreError):
            broken.insert(PaymentRecord(transaction_id="t1", amount=5.0, payment_method="bank"))
    finally:
        broken.close()
