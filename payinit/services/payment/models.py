"""Payment database models.

The `payment` table holds one row per accepted initiation request. This
service only ever inserts; status progression belongs to settlement.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import DateTime, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from payinit.common.db import Base


PENDING = "pending"


@dataclass(frozen=True)
class PaymentRecord:
    """Persistable pending payment built from a validated request."""

    transaction_id: str
    amount: float
    payment_method: str
    status: str = PENDING


class Payment(Base):
    """Stored payment record keyed by transaction id."""

    __tablename__ = "payment"

    transaction_id: Mapped[str] = mapped_column(String, primary_key=True)
    amount: Mapped[float] = mapped_column(Float)
    payment_method: Mapped[str] = mapped_column(String)
    status: Mapped[str] = mapped_column(String, default=PENDING)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
