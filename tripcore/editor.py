"""Day/activity editor.

Pure functions over a single itinerary. Each operation returns a new
Itinerary snapshot with updated_at bumped; the input is never mutated, so the
result can be handed straight to ItineraryRepository.update().
"""

from datetime import date, datetime

from tripcore.errors import DuplicateDateError, NotFoundError, ValidationError
from tripcore.models.common import new_id, utcnow
from tripcore.models.itinerary import Activity, Day, Itinerary


def _calendar_date(value: date | datetime) -> date:
    # datetime is a subclass of date; only the calendar part identifies a day
    if isinstance(value, datetime):
        return value.date()
    return value


def _optional_label(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def touch(itinerary: Itinerary, now: datetime | None = None) -> Itinerary:
    """Return a copy with updated_at bumped, never moving it backwards.

    Raises:
        ValidationError: If now is a naive datetime.
    """
    now = now or utcnow()
    if now.tzinfo is None:
        raise ValidationError("now must be a timezone-aware datetime")
    return itinerary.model_copy(update={"updated_at": max(now, itinerary.updated_at)})


def _with_days(itinerary: Itinerary, days: list[Day], now: datetime | None) -> Itinerary:
    return touch(itinerary.model_copy(update={"days": tuple(days)}), now)


def _require_day(itinerary: Itinerary, day_id: str) -> Day:
    day = itinerary.find_day(day_id)
    if day is None:
        raise NotFoundError("Day", day_id)
    return day


def add_day(itinerary: Itinerary, day_date: date | datetime, *, now: datetime | None = None) -> Itinerary:
    """Add an empty day and keep days sorted ascending by date.

    Raises:
        DuplicateDateError: If a day with the same calendar date exists.
    """
    new_date = _calendar_date(day_date)

    if any(day.date == new_date for day in itinerary.days):
        raise DuplicateDateError(itinerary.id, new_date)

    existing_ids = {day.id for day in itinerary.days}
    day_id = new_id()
    while day_id in existing_ids:
        day_id = new_id()

    days = sorted([*itinerary.days, Day(id=day_id, date=new_date)], key=lambda d: d.date)
    return _with_days(itinerary, days, now)


def remove_day(itinerary: Itinerary, day_id: str, *, now: datetime | None = None) -> Itinerary:
    """Remove a day and its activities. Unknown ids leave the days untouched."""
    days = [day for day in itinerary.days if day.id != day_id]
    return _with_days(itinerary, days, now)


def add_activity(
    itinerary: Itinerary,
    day_id: str,
    *,
    description: str,
    time: str | None = None,
    location: str | None = None,
    now: datetime | None = None,
) -> Itinerary:
    """Append an activity to a day, preserving insertion order.

    Raises:
        ValidationError: If description is blank.
        NotFoundError: If the day does not exist.
    """
    if not description or not description.strip():
        raise ValidationError("Please enter an activity description")

    day = _require_day(itinerary, day_id)

    existing_ids = {activity.id for activity in day.activities}
    activity_id = new_id()
    while activity_id in existing_ids:
        activity_id = new_id()

    activity = Activity(
        id=activity_id,
        time=_optional_label(time),
        description=description,
        location=_optional_label(location),
    )
    updated_day = day.model_copy(update={"activities": (*day.activities, activity)})

    days = [updated_day if d.id == day_id else d for d in itinerary.days]
    return _with_days(itinerary, days, now)


def remove_activity(
    itinerary: Itinerary, day_id: str, activity_id: str, *, now: datetime | None = None
) -> Itinerary:
    """Remove an activity from a day. Unknown activity ids are a no-op.

    Raises:
        NotFoundError: If the day does not exist.
    """
    day = _require_day(itinerary, day_id)

    activities = tuple(a for a in day.activities if a.id != activity_id)
    updated_day = day.model_copy(update={"activities": activities})

    days = [updated_day if d.id == day_id else d for d in itinerary.days]
    return _with_days(itinerary, days, now)
