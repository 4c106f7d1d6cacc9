"""Insert-only client for the payment store."""

from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from payinit.common.db import make_session_factory
from payinit.common.logging import logger
from payinit.services.payment.errors import StoreError
from payinit.services.payment.models import Payment, PaymentRecord


@dataclass(frozen=True)
class InsertOutcome:
    """Receipt for a stored record."""

    inserted_id: str


class PaymentStore:
    """Writes pending payment records through one shared engine.

    The engine and session factory are created once and never mutated; each
    insert opens its own short-lived session, so one instance can serve every
    concurrent request.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.session_factory = make_session_factory(engine)

    def insert(self, record: PaymentRecord) -> InsertOutcome:
        """Insert one record; raise `StoreError` on any backend failure."""

        try:
            with self.session_factory() as db:
                db.add(
                    Payment(
                        transaction_id=record.transaction_id,
                        amount=record.amount,
                        payment_method=record.payment_method,
                        status=record.status,
                    )
                )
                db.commit()
        except SQLAlchemyError as exc:
            logger.error("store_insert_failed transaction_id=%s error=%s", record.transaction_id, exc)
            raise StoreError(f"insert failed: {type(exc).__name__}") from exc
        return InsertOutcome(inserted_id=record.transaction_id)

    def create_schema(self) -> None:
        """Create the `payment` table when it does not exist yet."""

        Payment.metadata.create_all(bind=self.engine, tables=[Payment.__table__])

    def close(self) -> None:
        self.engine.dispose()
