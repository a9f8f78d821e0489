"""Models package - re-exports for convenience."""

from tripcore.models.booking import (
    BookingForm,
    BookingResult,
    BookingState,
    PaymentMethod,
    PaymentResult,
    PricingQuote,
)
from tripcore.models.common import new_id, utcnow
from tripcore.models.itinerary import Activity, Day, Itinerary, itinerary_collection

__all__ = [
    # Common
    "new_id",
    "utcnow",
    # Itinerary
    "Activity",
    "Day",
    "Itinerary",
    "itinerary_collection",
    # Booking
    "BookingForm",
    "BookingResult",
    "BookingState",
    "PaymentMethod",
    "PaymentResult",
    "PricingQuote",
]
