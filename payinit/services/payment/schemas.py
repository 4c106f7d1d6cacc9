"""API request/response schemas for payment initiation."""

from enum import Enum

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    """Accepted payment rails. Values are the canonical lowercase wire form."""

    BANK = "bank"
    TRUEMONEY = "truemoney"


class PaymentRequest(BaseModel):
    """Payload accepted by `POST /payment/initiate`.

    Only types are checked here; amount bounds are enforced by
    `validate_payment_request` so they stay configurable.
    """

    amount: float = Field(strict=True)
    payment_method: PaymentMethod


class PaymentResponse(BaseModel):
    """Acknowledgement returned once the pending record is stored."""

    status: str
    amount: float


class ErrorBody(BaseModel):
    """Uniform error payload for every rejected request."""

    message: str
    code: str
