"""Centralised configuration handling for StatementSpend."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WEEK_LENGTH_DAYS = 7
DEFAULT_STATEMENT_CLOSE_DAY = 5

_OPTION_ALIASES = {
    "weekLengthDays": "week_length_days",
    "week_length_days": "week_length_days",
    "statementCloseDay": "statement_close_day",
    "statement_close_day": "statement_close_day",
}

_CONVENTION_KEYS = ("weekdayConvention", "weekday_convention")
WEEKDAY_CONVENTIONS = ("monday", "sunday")


class AggregationSettings(BaseSettings):
    """Options controlling weekly bucketing, sourced from env vars or callers."""

    week_length_days: int = Field(DEFAULT_WEEK_LENGTH_DAYS, gt=0)
    statement_close_day: int = Field(DEFAULT_STATEMENT_CLOSE_DAY, ge=0, le=6)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="STATEMENTSPEND_", extra="ignore", frozen=True)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "AggregationSettings":
        """Build settings from a host options mapping, ignoring unknown keys.

        ``statement_close_day`` is stored in ``date.weekday()`` numbering
        (Monday=0 ... Sunday=6). Hosts that number weekdays from Sunday=0,
        as JavaScript's ``Date.getDay()`` does, pass
        ``weekdayConvention="sunday"`` and the close day is converted.
        """

        options = options or {}
        convention = next((options[key] for key in _CONVENTION_KEYS if options.get(key) is not None), "monday")
        convention = str(convention).lower()
        if convention not in WEEKDAY_CONVENTIONS:
            raise ValueError(f"Unknown weekday convention: {convention!r}")

        overrides: dict[str, Any] = {}
        for key, value in options.items():
            field = _OPTION_ALIASES.get(key)
            if field is not None and value is not None:
                overrides[field] = value

        close_day = overrides.get("statement_close_day")
        if convention == "sunday" and isinstance(close_day, int) and 0 <= close_day <= 6:
            overrides["statement_close_day"] = (close_day - 1) % 7
        return cls(**overrides)


@lru_cache
def get_settings() -> AggregationSettings:
    """Load and cache application settings."""

    return AggregationSettings()
