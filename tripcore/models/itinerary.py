"""Itinerary models - the persisted trip planning tree."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from tripcore.models.common import new_id, utcnow


class Activity(BaseModel):
    """Single planned action within a day."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    time: str | None = None  # free-text label, never parsed
    description: str = Field(..., min_length=1)
    location: str | None = None


class Day(BaseModel):
    """Single calendar date within an itinerary."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    date: date
    activities: tuple[Activity, ...] = ()


class Itinerary(BaseModel):
    """Named trip plan.

    Days are kept sorted ascending by date and no two days share a date.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    days: tuple[Day, ...] = ()
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("days")
    @classmethod
    def days_sorted_and_unique(cls, days: tuple[Day, ...]) -> tuple[Day, ...]:
        dates = [d.date for d in days]
        if len(set(dates)) != len(dates):
            raise ValueError("days must have distinct dates")
        if dates != sorted(dates):
            raise ValueError("days must be sorted ascending by date")
        return days

    def find_day(self, day_id: str) -> Day | None:
        """Return the day with the given id, if any."""
        for day in self.days:
            if day.id == day_id:
                return day
        return None


# Persisted form of the repository collection: a JSON array of itineraries.
itinerary_collection = TypeAdapter(list[Itinerary])
