"""Structured logging for booking attempts."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredBookingLogger:
    """Structured logger for booking state transitions."""

    def log_transition(
        self,
        attempt_id: str,
        state: str,
        trip_name: str,
        amount: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log booking state transition with structured data."""
        log_data: dict[str, Any] = {
            "attempt_id": attempt_id,
            "state": state,
            "trip": trip_name,
        }

        if amount is not None:
            log_data["amount"] = amount
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Booking {attempt_id}: {state}"

        if state == "failed":
            logger.warning(log_msg, extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})

    def log_reminder_failure(self, attempt_id: str, trip_name: str, error: Exception) -> None:
        """Log a reminder that could not be scheduled; the booking still stands."""
        logger.error(
            f"Booking {attempt_id}: reminder scheduling failed: {error}",
            extra={
                "structured": {
                    "attempt_id": attempt_id,
                    "trip": trip_name,
                    "error_reason": str(error),
                }
            },
            exc_info=error,
        )
