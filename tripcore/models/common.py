"""Common helpers shared across all models."""

import secrets
import time
from datetime import UTC, datetime


def new_id() -> str:
    """Generate an opaque, stable identifier (epoch millis + random suffix)."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)
