"""Booking orchestrator.

Sequences one booking attempt: validate the form, charge the pricing engine's
total through the payment collaborator, then request a trip reminder.

State machine per attempt:
    idle -> validating -> paying -> (success | failed)

Payment failures are terminal and surfaced verbatim as PaymentError. Reminder
failures are logged and counted only; the booking is already paid for.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from time import perf_counter

from tripcore.booking.collaborators import PaymentProcessor, ReminderScheduler
from tripcore.config import Settings, get_settings
from tripcore.errors import PaymentError, ValidationError
from tripcore.models.booking import BookingForm, BookingResult, BookingState, PricingQuote
from tripcore.models.common import new_id, utcnow
from tripcore.pricing import quote
from tripcore.utils.logging import StructuredBookingLogger
from tripcore.utils.metrics import PrometheusBookingMetrics

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_ERROR = "Payment failed"


def reminder_label(trip_name: str) -> str:
    """Text of the trip reminder."""
    return f"Your trip to {trip_name} is tomorrow! Don't forget to pack your essentials."


def reminder_time(trip_date: date, hour: int) -> datetime:
    """Fire time for a trip reminder: one calendar day before the trip."""
    return datetime.combine(trip_date - timedelta(days=1), time(hour=hour), tzinfo=UTC)


@dataclass
class BookingAttempt:
    """State of a single booking submission."""

    attempt_id: str
    trip_name: str
    state: BookingState = BookingState.idle
    history: list[BookingState] = field(default_factory=lambda: [BookingState.idle])
    quote: PricingQuote | None = None
    error: str | None = None

    def transition(self, state: BookingState) -> None:
        """Move to the next state and record it."""
        self.state = state
        self.history.append(state)


class BookingOrchestrator:
    """Runs booking attempts against the payment and notification collaborators.

    Not internally serialized: the host must not interleave two submissions
    for the same session.
    """

    def __init__(
        self,
        payments: PaymentProcessor,
        reminders: ReminderScheduler,
        settings: Settings | None = None,
        metrics: PrometheusBookingMetrics | None = None,
        structured_logger: StructuredBookingLogger | None = None,
    ) -> None:
        self._payments = payments
        self._reminders = reminders
        self._settings = settings or get_settings()
        self._metrics = metrics or PrometheusBookingMetrics()
        self._log = structured_logger or StructuredBookingLogger()
        self.last_attempt: BookingAttempt | None = None

    def quote_for(self, form: BookingForm) -> PricingQuote:
        """Price the form's trip; travelers must already be validated."""
        base_price = form.base_price_per_person
        if base_price is None:
            base_price = self._settings.base_price_per_person
        return quote(base_price, form.trip_date, form.travelers)

    async def submit(self, form: BookingForm) -> BookingResult:
        """Submit a booking.

        Args:
            form: Checkout form

        Returns:
            BookingResult in the success state

        Raises:
            ValidationError: Required fields missing or invalid; no payment made.
            PaymentError: Payment collaborator declined or failed; no reminder.
        """
        attempt = BookingAttempt(attempt_id=new_id(), trip_name=form.trip_name)
        self.last_attempt = attempt

        attempt.transition(BookingState.validating)
        self._log.log_transition(attempt.attempt_id, attempt.state.value, form.trip_name)
        try:
            self._validate(form)
        except ValidationError as e:
            self._fail(attempt, str(e), outcome="invalid")
            raise

        attempt.quote = self.quote_for(form)
        amount = attempt.quote.total_price

        attempt.transition(BookingState.paying)
        self._log.log_transition(attempt.attempt_id, attempt.state.value, form.trip_name, amount)

        started = perf_counter()
        try:
            result = await self._payments.process(amount, form.payment_method)
        except Exception as e:
            self._metrics.record_payment_latency("error", (perf_counter() - started) * 1000)
            self._fail(attempt, str(e) or DEFAULT_PAYMENT_ERROR, outcome="payment_failed")
            raise PaymentError(str(e) or DEFAULT_PAYMENT_ERROR) from e

        latency_ms = (perf_counter() - started) * 1000
        if not result.success:
            self._metrics.record_payment_latency("declined", latency_ms)
            message = result.error or DEFAULT_PAYMENT_ERROR
            self._fail(attempt, message, outcome="payment_failed")
            raise PaymentError(message)
        self._metrics.record_payment_latency("success", latency_ms)

        notification_id = await self._schedule_reminder(attempt, form)

        attempt.transition(BookingState.success)
        self._log.log_transition(attempt.attempt_id, attempt.state.value, form.trip_name, amount)
        self._metrics.inc_attempt("success")

        return BookingResult(
            state=attempt.state,
            quote=attempt.quote,
            transaction_id=result.transaction_id,
            notification_id=notification_id,
            completed_at=utcnow(),
        )

    async def cancel_reminder(self, notification_id: str) -> None:
        """Cancel a previously scheduled reminder. Failures are logged only."""
        try:
            await self._reminders.cancel(notification_id)
        except Exception as e:
            logger.error(f"[BookingOrchestrator] cancelling reminder {notification_id} failed: {e}")

    def _validate(self, form: BookingForm) -> None:
        if not form.full_name.strip() or not form.email.strip():
            raise ValidationError("Please fill all required fields")
        if form.travelers < 1:
            raise ValidationError("At least one traveler is required")

    async def _schedule_reminder(self, attempt: BookingAttempt, form: BookingForm) -> str | None:
        try:
            fire_at = reminder_time(form.trip_date, self._settings.reminder_hour)
            return await self._reminders.schedule_reminder(reminder_label(form.trip_name), fire_at)
        except Exception as e:
            self._metrics.inc_reminder_failure()
            self._log.log_reminder_failure(attempt.attempt_id, form.trip_name, e)
            return None

    def _fail(self, attempt: BookingAttempt, message: str, outcome: str) -> None:
        attempt.error = message
        attempt.transition(BookingState.failed)
        self._log.log_transition(
            attempt.attempt_id, attempt.state.value, attempt.trip_name, error_reason=message
        )
        self._metrics.inc_attempt(outcome)
