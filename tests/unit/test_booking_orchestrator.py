"""Unit tests for the booking orchestrator."""

from datetime import UTC, date, datetime

import pytest
from prometheus_client import REGISTRY

from tripcore.booking.orchestrator import BookingOrchestrator, reminder_label, reminder_time
from tripcore.config import Settings
from tripcore.errors import PaymentError, ValidationError
from tripcore.models import BookingForm, BookingState, PaymentMethod, PaymentResult


def make_form(**overrides) -> BookingForm:
    data = {
        "full_name": "Pemba Sherpa",
        "email": "pemba@example.com",
        "travelers": 2,
        "payment_method": PaymentMethod.card,
        "trip_name": "Everest Base Camp",
        "trip_date": date(2025, 4, 10),
        "base_price_per_person": 500,
    }
    data.update(overrides)
    return BookingForm(**data)


def attempts(outcome: str) -> float:
    return REGISTRY.get_sample_value("booking_attempts_total", {"outcome": outcome}) or 0.0


@pytest.fixture
def orchestrator(payments, reminders) -> BookingOrchestrator:
    return BookingOrchestrator(payments, reminders, settings=Settings(reminder_hour=9))


class TestValidation:
    """Validation failures never reach the payment collaborator."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["full_name", "email"])
    async def test_missing_required_field(self, orchestrator, payments, reminders, field: str) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.submit(make_form(**{field: ""}))

        assert payments.calls == []
        assert reminders.scheduled == []
        assert orchestrator.last_attempt.state == BookingState.failed

    @pytest.mark.asyncio
    async def test_whitespace_name_is_missing(self, orchestrator, payments) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.submit(make_form(full_name="   "))
        assert len(payments.calls) == 0

    @pytest.mark.asyncio
    async def test_zero_travelers_rejected(self, orchestrator, payments) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.submit(make_form(travelers=0))
        assert len(payments.calls) == 0

    @pytest.mark.asyncio
    async def test_invalid_attempt_counted(self, orchestrator) -> None:
        before = attempts("invalid")
        with pytest.raises(ValidationError):
            await orchestrator.submit(make_form(email=""))
        assert attempts("invalid") == before + 1


class TestPayment:
    """Payment failures are terminal and surfaced verbatim."""

    @pytest.mark.asyncio
    async def test_charges_pricing_engine_total(self, orchestrator, payments) -> None:
        # 5 travelers * 500 in July: 2500 * 1.2 = 3000, minus 10% = 2700
        form = make_form(travelers=5, trip_date=date(2025, 7, 10), payment_method=PaymentMethod.paypal)

        result = await orchestrator.submit(form)

        assert payments.calls == [(2700, PaymentMethod.paypal)]
        assert result.quote.total_price == 2700

    @pytest.mark.asyncio
    async def test_declined_payment(self, orchestrator, payments, reminders) -> None:
        payments.result = PaymentResult(success=False, error="declined")

        with pytest.raises(PaymentError, match="^declined$"):
            await orchestrator.submit(make_form())

        assert reminders.scheduled == []
        assert orchestrator.last_attempt.state == BookingState.failed
        assert orchestrator.last_attempt.error == "declined"

    @pytest.mark.asyncio
    async def test_failed_payment_without_message(self, orchestrator, payments) -> None:
        payments.result = PaymentResult(success=False)

        with pytest.raises(PaymentError, match="Payment failed"):
            await orchestrator.submit(make_form())

    @pytest.mark.asyncio
    async def test_collaborator_exception_becomes_payment_error(
        self, orchestrator, payments, reminders
    ) -> None:
        payments.exc = RuntimeError("gateway unreachable")

        with pytest.raises(PaymentError, match="gateway unreachable"):
            await orchestrator.submit(make_form())

        assert reminders.scheduled == []
        assert len(payments.calls) == 1

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, orchestrator, payments) -> None:
        payments.result = PaymentResult(success=False, error="declined")

        with pytest.raises(PaymentError):
            await orchestrator.submit(make_form())

        assert len(payments.calls) == 1


class TestSuccess:
    """Successful bookings schedule a reminder one day before the trip."""

    @pytest.mark.asyncio
    async def test_success_schedules_reminder(self, orchestrator, payments, reminders) -> None:
        result = await orchestrator.submit(make_form())

        assert result.state == BookingState.success
        assert result.transaction_id == "TXN-test"
        assert result.notification_id == "notif-1"
        assert reminders.scheduled == [
            (
                reminder_label("Everest Base Camp"),
                datetime(2025, 4, 9, 9, 0, tzinfo=UTC),
            )
        ]

    @pytest.mark.asyncio
    async def test_state_history(self, orchestrator) -> None:
        await orchestrator.submit(make_form())

        assert orchestrator.last_attempt.history == [
            BookingState.idle,
            BookingState.validating,
            BookingState.paying,
            BookingState.success,
        ]

    @pytest.mark.asyncio
    async def test_reminder_failure_does_not_fail_booking(
        self, orchestrator, payments, reminders
    ) -> None:
        reminders.exc = RuntimeError("notifications disabled")
        failures_before = REGISTRY.get_sample_value("reminder_failures_total") or 0.0

        result = await orchestrator.submit(make_form())

        assert result.state == BookingState.success
        assert result.notification_id is None
        assert len(payments.calls) == 1
        assert REGISTRY.get_sample_value("reminder_failures_total") == failures_before + 1

    @pytest.mark.asyncio
    async def test_default_base_price_from_settings(self, payments, reminders) -> None:
        orchestrator = BookingOrchestrator(
            payments, reminders, settings=Settings(base_price_per_person=100)
        )

        await orchestrator.submit(make_form(base_price_per_person=None, travelers=1))

        assert payments.calls[0][0] == 100

    @pytest.mark.asyncio
    async def test_out_of_range_reminder_hour_does_not_fail_paid_booking(
        self, payments, reminders
    ) -> None:
        # model_construct skips the settings bounds so the orchestrator guard is exercised
        orchestrator = BookingOrchestrator(
            payments, reminders, settings=Settings.model_construct(reminder_hour=24)
        )

        result = await orchestrator.submit(make_form())

        assert result.state == BookingState.success
        assert result.notification_id is None
        assert len(payments.calls) == 1
        assert reminders.scheduled == []

    @pytest.mark.asyncio
    async def test_earliest_trip_date_does_not_fail_paid_booking(
        self, orchestrator, payments, reminders
    ) -> None:
        result = await orchestrator.submit(make_form(trip_date=date.min))

        assert result.state == BookingState.success
        assert result.notification_id is None
        assert len(payments.calls) == 1
        assert reminders.scheduled == []


class TestCancelReminder:
    """Cancellation failures are logged only."""

    @pytest.mark.asyncio
    async def test_cancel_reminder(self, orchestrator, reminders) -> None:
        await orchestrator.cancel_reminder("notif-1")
        assert reminders.cancelled == ["notif-1"]

    @pytest.mark.asyncio
    async def test_cancel_reminder_failure_is_swallowed(self, orchestrator, reminders) -> None:
        reminders.exc = RuntimeError("boom")
        await orchestrator.cancel_reminder("notif-1")


def test_reminder_time_crosses_month_boundary() -> None:
    assert reminder_time(date(2025, 3, 1), 9) == datetime(2025, 2, 28, 9, 0, tzinfo=UTC)
