"""Core domain package for the StatementSpend aggregation engine.

The session and summary service live in :mod:`core.session` and
:mod:`core.summary_service`; they depend on :mod:`analytics`, which in turn
imports the models and events exported here.
"""

from .cache import ResultCache
from .events import EventRecorder, LoggingEventRecorder, NullEventRecorder
from .models import (
    UNCATEGORIZED,
    AggregationResult,
    CategoryRow,
    CategorySummary,
    CategoryTotal,
    TableFilters,
    WeekBucket,
    WeeklySummary,
)

__all__ = [
    "UNCATEGORIZED",
    "AggregationResult",
    "CategoryRow",
    "CategorySummary",
    "CategoryTotal",
    "EventRecorder",
    "LoggingEventRecorder",
    "NullEventRecorder",
    "ResultCache",
    "TableFilters",
    "WeekBucket",
    "WeeklySummary",
]
