"""Error taxonomy for the planning and booking core.

Every error here is recoverable by the caller: correct the input, reload the
collection, or retry the call.
"""


class TripCoreError(Exception):
    """Base class for all core errors."""

    pass


class ValidationError(TripCoreError):
    """Caller supplied invalid input (blank name, blank description, ...)."""

    pass


class DuplicateDateError(TripCoreError):
    """A day with the same calendar date already exists in the itinerary."""

    def __init__(self, itinerary_id: str, day_date: object) -> None:
        super().__init__(f"Itinerary {itinerary_id} already has a day on {day_date}")
        self.itinerary_id = itinerary_id
        self.day_date = day_date


class NotFoundError(TripCoreError):
    """Referenced entity does not exist (stale id)."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class StorageReadError(TripCoreError):
    """Stored state could not be read or is malformed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to read '{key}': {reason}")
        self.key = key
        self.reason = reason


class StorageWriteError(TripCoreError, OSError):
    """Persistence adapter failed to write the serialized state."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to write '{key}': {reason}")
        self.key = key
        self.reason = reason


class PaymentError(TripCoreError):
    """Payment collaborator declined or failed; message is surfaced verbatim."""

    pass


class PaymentMethodUnsupportedError(TripCoreError):
    """Payment method is not available on the current platform."""

    pass
