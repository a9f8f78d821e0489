"""Dynamic pricing engine. Pure and deterministic."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from tripcore.models.booking import PricingQuote

PEAK_SEASON_MONTHS = frozenset({6, 7, 8, 12})  # June, July, August, December
PEAK_SEASON_MULTIPLIER = 1.2
OFF_SEASON_MULTIPLIER = 1.0
GROUP_DISCOUNT_THRESHOLD = 5
GROUP_DISCOUNT_RATE = Decimal("0.1")


def season_multiplier(trip_date: date) -> float:
    """Return the pricing factor for the calendar month of trip_date."""
    if trip_date.month in PEAK_SEASON_MONTHS:
        return PEAK_SEASON_MULTIPLIER
    return OFF_SEASON_MULTIPLIER


def compute_total(base_price: float, season_multiplier: float, group_size: int) -> int:
    """Compute the trip total in whole currency units.

    base_price is the group subtotal (per-person price already multiplied by
    group_size). Callers must ensure group_size >= 1.
    """
    # str() keeps 500 * 1.2 at 600 instead of 599.999...
    subtotal = Decimal(str(base_price)) * Decimal(str(season_multiplier))

    if group_size >= GROUP_DISCOUNT_THRESHOLD:
        subtotal -= subtotal * GROUP_DISCOUNT_RATE

    return int(subtotal.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def quote(base_price_per_person: int, trip_date: date, group_size: int) -> PricingQuote:
    """Build a full quote for a per-person price, trip date and group size."""
    multiplier = season_multiplier(trip_date)
    total = compute_total(
        base_price=base_price_per_person * group_size,
        season_multiplier=multiplier,
        group_size=group_size,
    )
    return PricingQuote(
        base_price_per_person=base_price_per_person,
        season_multiplier=multiplier,
        group_size=group_size,
        total_price=total,
    )
