"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from tripcore.db.inmemory import InMemoryBlobStore
from tripcore.db.repositories import ItineraryRepository
from tripcore.db.sql_storage import SqlBlobStore
from tripcore.models import PaymentMethod, PaymentResult


class SteppingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class FakePaymentProcessor:
    """Payment collaborator double recording every call."""

    def __init__(self, result: PaymentResult | None = None, exc: Exception | None = None) -> None:
        self.result = result or PaymentResult(success=True, transaction_id="TXN-test")
        self.exc = exc
        self.calls: list[tuple[int, PaymentMethod]] = []

    async def process(self, amount: int, method: PaymentMethod) -> PaymentResult:
        self.calls.append((amount, method))
        if self.exc is not None:
            raise self.exc
        return self.result


class FakeReminderScheduler:
    """Notification collaborator double recording every call."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc
        self.scheduled: list[tuple[str, datetime]] = []
        self.cancelled: list[str] = []

    async def schedule_reminder(self, label: str, fire_at: datetime) -> str:
        if self.exc is not None:
            raise self.exc
        self.scheduled.append((label, fire_at))
        return f"notif-{len(self.scheduled)}"

    async def cancel(self, notification_id: str) -> None:
        if self.exc is not None:
            raise self.exc
        self.cancelled.append(notification_id)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def repository(blob_store: InMemoryBlobStore, clock: SteppingClock) -> ItineraryRepository:
    return ItineraryRepository(blob_store, clock=clock)


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine shared across sessions."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_blob_store(sqlite_engine: AsyncEngine) -> SqlBlobStore:
    store = SqlBlobStore(sqlite_engine)
    await store.create_schema()
    return store


@pytest.fixture
def payments() -> FakePaymentProcessor:
    return FakePaymentProcessor()


@pytest.fixture
def reminders() -> FakeReminderScheduler:
    return FakeReminderScheduler()
