"""External collaborator protocols and reference implementations.

Payment and notification delivery live outside the core. The reference
implementations here simulate them: the payment processor enforces per-platform
method support, the reminder scheduler only logs.
"""

import asyncio
import logging
import secrets
import time
from datetime import datetime
from typing import Literal, Protocol

from tripcore.config import Settings
from tripcore.errors import PaymentMethodUnsupportedError
from tripcore.models.booking import PaymentMethod, PaymentResult
from tripcore.models.common import new_id

logger = logging.getLogger(__name__)

Platform = Literal["ios", "android", "web"]

SUPPORTED_METHODS: dict[str, frozenset[PaymentMethod]] = {
    "ios": frozenset({PaymentMethod.card, PaymentMethod.paypal, PaymentMethod.apple_pay}),
    "android": frozenset({PaymentMethod.card, PaymentMethod.paypal, PaymentMethod.google_pay}),
    "web": frozenset({PaymentMethod.card, PaymentMethod.paypal}),
}


class PaymentProcessor(Protocol):
    """Payment collaborator."""

    async def process(self, amount: int, method: PaymentMethod) -> PaymentResult:
        """Charge amount (whole currency units) with the given method."""
        ...


class ReminderScheduler(Protocol):
    """Notification collaborator."""

    async def schedule_reminder(self, label: str, fire_at: datetime) -> str:
        """Schedule a reminder and return its notification id."""
        ...

    async def cancel(self, notification_id: str) -> None:
        """Cancel a scheduled reminder."""
        ...


class SimulatedPaymentProcessor:
    """Mock payment processor with platform-dependent method support."""

    def __init__(self, platform: Platform = "web", latency_ms: int = 0) -> None:
        self._platform = platform
        self._latency_ms = latency_ms

    def is_supported(self, method: PaymentMethod) -> bool:
        """Check whether a method is available on this platform."""
        return method in SUPPORTED_METHODS.get(self._platform, SUPPORTED_METHODS["web"])

    def _check_supported(self, method: PaymentMethod) -> None:
        if not self.is_supported(method):
            raise PaymentMethodUnsupportedError(
                f"Payment method {method.value} is not supported on this platform"
            )

    async def process(self, amount: int, method: PaymentMethod) -> PaymentResult:
        """Simulate a charge."""
        try:
            self._check_supported(method)
        except PaymentMethodUnsupportedError as e:
            return PaymentResult(success=False, error=str(e))

        if self._latency_ms:
            await asyncio.sleep(self._latency_ms / 1000)

        transaction_id = f"TXN-{int(time.time() * 1000)}-{secrets.token_hex(5)}"
        logger.info(f"[SimulatedPaymentProcessor] charged {amount} via {method.value}: {transaction_id}")
        return PaymentResult(success=True, transaction_id=transaction_id)


class LoggingReminderScheduler:
    """Reminder scheduler used when native notifications are unavailable."""

    def __init__(self) -> None:
        self.scheduled: dict[str, tuple[str, datetime]] = {}

    async def schedule_reminder(self, label: str, fire_at: datetime) -> str:
        """Record and log the reminder."""
        notification_id = new_id()
        self.scheduled[notification_id] = (label, fire_at)
        logger.info(f"Notification scheduled: {label} at {fire_at.isoformat()}")
        return notification_id

    async def cancel(self, notification_id: str) -> None:
        """Forget the reminder."""
        self.scheduled.pop(notification_id, None)
        logger.info(f"Notification cancelled: {notification_id}")


def create_payment_processor(settings: Settings) -> SimulatedPaymentProcessor:
    """Create the simulated payment processor configured by settings."""
    return SimulatedPaymentProcessor(
        platform=settings.payment_platform,
        latency_ms=settings.simulated_payment_latency_ms,
    )
