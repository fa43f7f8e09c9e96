"""Application configuration utilities."""

from .settings import (
    DEFAULT_STATEMENT_CLOSE_DAY,
    DEFAULT_WEEK_LENGTH_DAYS,
    AggregationSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_STATEMENT_CLOSE_DAY",
    "DEFAULT_WEEK_LENGTH_DAYS",
    "AggregationSettings",
    "get_settings",
]
