"""Booking and pricing models."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class PaymentMethod(str, Enum):
    """Payment method offered at checkout."""

    card = "card"
    paypal = "paypal"
    apple_pay = "apple-pay"
    google_pay = "google-pay"


class BookingState(str, Enum):
    """Booking attempt state."""

    idle = "idle"
    validating = "validating"
    paying = "paying"
    success = "success"
    failed = "failed"


class PricingQuote(BaseModel):
    """Derived price for a trip; recomputed on input change, never persisted."""

    model_config = ConfigDict(frozen=True)

    base_price_per_person: int
    season_multiplier: float
    group_size: int
    total_price: int


class BookingForm(BaseModel):
    """Checkout form as submitted by the user.

    Field contents are validated by the orchestrator, not by the model, so that
    blank input surfaces as a core ValidationError.
    """

    full_name: str = ""
    email: str = ""
    travelers: int = 1
    payment_method: PaymentMethod = PaymentMethod.card
    trip_name: str
    trip_date: date
    base_price_per_person: int | None = None


class PaymentResult(BaseModel):
    """Outcome reported by the payment collaborator."""

    success: bool
    transaction_id: str | None = None
    error: str | None = None


class BookingResult(BaseModel):
    """Successful booking."""

    state: BookingState
    quote: PricingQuote
    transaction_id: str | None
    notification_id: str | None
    completed_at: datetime
