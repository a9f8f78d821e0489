"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Persistence
    storage_backend: Literal["memory", "sql", "redis"] = "memory"
    database_url: str | None = None
    redis_url: str | None = None
    itineraries_storage_key: str = "itineraries"

    # Pricing (per person, whole currency units)
    base_price_per_person: int = 100

    # Payment
    payment_platform: Literal["ios", "android", "web"] = "web"
    simulated_payment_latency_ms: int = 0

    # Reminders (hour of day, UTC)
    reminder_hour: int = Field(default=9, ge=0, le=23)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
