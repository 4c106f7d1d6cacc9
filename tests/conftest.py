"""Shared fixtures: SQLite-backed payment store and an app client wired to it."""

import os

os.environ.setdefault("TRACING_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.pool import StaticPool

from payinit.services.payment.main import app, get_payment_service
from payinit.services.payment.models import Payment
from payinit.services.payment.service import PaymentService
from payinit.services.payment.store import InsertOutcome, PaymentStore


def sqlite_store(create_schema: bool = True) -> PaymentStore:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = PaymentStore(engine)
    if create_schema:
        store.create_schema()
    return store


class RecordingStore:
    """In-memory stand-in that remembers every inserted record."""

    def __init__(self) -> None:
        self.records = []

    def insert(self, record):
        self.records.append(record)
        return InsertOutcome(inserted_id=record.transaction_id)


class ExplodingStore:
    """Store whose driver fails with something other than a database error."""

    def insert(self, record):
        raise RuntimeError("driver crashed")


@pytest.fixture
def store():
    store = sqlite_store()
    yield store
    store.close()


@pytest.fixture
def stored_payments(store):
    def _rows():
        with store.session_factory() as db:
            return db.execute(select(Payment)).scalars().all()

    return _rows


def _client_for(store) -> TestClient:
    app.dependency_overrides[get_payment_service] = lambda: PaymentService(store)
    return TestClient(app)


@pytest.fixture
def client(store):
    yield _client_for(store)
    app.dependency_overrides.clear()


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def recording_client(recording_store):
    yield _client_for(recording_store)
    app.dependency_overrides.clear()


@pytest.fixture
def exploding_client():
    yield _client_for(ExplodingStore())
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    """Client whose store has no `payment` table, so every insert fails."""

    broken = sqlite_store(create_schema=False)
    yield _client_for(broken)
    app.dependency_overrides.clear()
    broken.close()
