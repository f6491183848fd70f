"""Application configuration powered by environment variables."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load variables from a local .env file if present. This keeps runtime flexible.
load_dotenv()

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

_DURATION_UNITS = {
    "second": SECOND,
    "minute": MINUTE,
    "hour": HOUR,
    "day": DAY,
    "week": WEEK,
    "month": MONTH,
    "year": YEAR,
}
_DURATION_PATTERN = re.compile(r"^(?:([0-9]+) )?(second|minute|hour|day|week|month|year)s?$")


def parse_duration(value: int | str) -> int:
    """Convert a duration such as ``"5 minutes"`` or ``"day"`` to milliseconds.

    Plain integers are taken to already be milliseconds.
    """
    if isinstance(value, bool):
        raise ValueError("duration must be an integer or a string")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("duration must not be negative")
        return value
    if not isinstance(value, str):
        raise ValueError("duration must be an integer or a string")

    match = _DURATION_PATTERN.match(value.strip().lower())
    if match is None:
        raise ValueError(f"invalid duration {value!r}")
    count = int(match.group(1)) if match.group(1) else 1
    return count * _DURATION_UNITS[match.group(2)]


class BounceLimit(BaseModel):
    """A single threshold: more than ``limit`` problems within ``period`` ms."""

    model_config = ConfigDict(frozen=True)

    period: int
    limit: int = Field(ge=0)

    @field_validator("period", mode="before")
    @classmethod
    def convert_period(cls, value: int | str) -> int:
        return parse_duration(value)


def _limits(*pairs: Tuple[str, int]) -> Tuple[BounceLimit, ...]:
    return tuple(BounceLimit(period=period, limit=limit) for period, limit in pairs)


class BounceLimits(BaseModel):
    """Per-category thresholds, evaluated in the order they are listed."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    hard: Tuple[BounceLimit, ...] = _limits(("1 day", 0), ("1 year", 1))
    soft: Tuple[BounceLimit, ...] = _limits(("5 minutes", 0))
    complaint: Tuple[BounceLimit, ...] = _limits(("1 day", 0), ("1 year", 1))


class Settings(BaseSettings):
    """Strongly typed configuration for the service."""

    app_name: str = "BounceWatch"
    environment: str = "development"
    api_version: str = "v1"
    database_url: str = "sqlite:///./bouncewatch.db"
    allowed_origins: List[str] = ["http://localhost", "http://localhost:3000"]
    bouncelimits: BounceLimits = BounceLimits()

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("database_url", mode="before")
    @classmethod
    def strip_wrapping_quotes(cls, value: str) -> str:
        """Allow quoted URLs in env files."""
        if isinstance(value, str):
            return value.strip().strip('"').strip("'")
        return value

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | List[str]) -> List[str]:
        """Allow comma separated origins in env files."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance for reuse across the app."""

    return Settings()


settings = get_settings()
