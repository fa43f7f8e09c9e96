"""Core logic for assembling StatementSpend weekly and category summaries."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence, TypeVar

import pandas as pd

from analytics.categorisation import build_category_breakdown, summarize_categories
from analytics.filtering import filter_by_category
from analytics.normalization import empty_transactions, normalize_transactions
from analytics.weekly import bucketize_weeks
from config.settings import AggregationSettings, get_settings
from core.cache import ResultCache
from core.events import EventRecorder, emit
from core.models import AggregationResult, CategorySummary, TableFilters, WeeklySummary

__all__ = [
    "build_weekly_summary",
    "build_category_summary",
    "empty_weekly_summary",
    "empty_category_summary",
]

T = TypeVar("T")


def _memo(cache: Optional[ResultCache], stage: str, inputs: Sequence[Any], compute: Callable[[], T]) -> T:
    if cache is None:
        return compute()
    return cache.get_or_compute(stage, inputs, compute)


def _table_filters(
    account: Optional[str],
    category: Optional[str],
    start: Optional[pd.Timestamp],
    end: Optional[pd.Timestamp],
) -> TableFilters:
    return {
        "account": account or None,
        "category": category or None,
        "start_date": start,
        "end_date": end,
    }


def empty_weekly_summary(category: Optional[str] = None, account: Optional[str] = None) -> WeeklySummary:
    return {
        "weeks": (),
        "total": 0.0,
        "start": None,
        "end": None,
        "weekly_average": 0.0,
        "transactions_in_category": empty_transactions(),
        "filters_for_table": _table_filters(account, category, None, None),
    }


def empty_category_summary() -> CategorySummary:
    return {
        "totals": MappingProxyType({}),
        "rows": [],
        "total_sum": 0.0,
        "projected_total": 0.0,
        "breakdown": build_category_breakdown([]),
    }


def build_weekly_summary(
    transactions: Any,
    category: Optional[str] = None,
    *,
    account: Optional[str] = None,
    settings: Optional[AggregationSettings] = None,
    recorder: Optional[EventRecorder] = None,
    cache: Optional[ResultCache] = None,
) -> WeeklySummary:
    """Normalize, filter and bucket raw transactions into a weekly summary.

    Any unexpected fault is recorded and converted into the empty summary.
    """

    settings = settings or get_settings()
    try:
        normalized = _memo(
            cache,
            "normalized",
            (transactions,),
            lambda: normalize_transactions(transactions, recorder=recorder),
        )
        in_category = _memo(
            cache,
            "filtered",
            (normalized, category or None),
            lambda: filter_by_category(normalized, category, recorder=recorder),
        )
        aggregation: AggregationResult = _memo(
            cache,
            "weeks",
            (in_category, settings.week_length_days, settings.statement_close_day),
            lambda: bucketize_weeks(
                in_category,
                week_length_days=settings.week_length_days,
                statement_close_day=settings.statement_close_day,
                recorder=recorder,
            ),
        )
    except Exception as exc:
        emit(recorder, "weekly_summary_failed", category=category, error=repr(exc))
        return empty_weekly_summary(category, account)

    emit(
        recorder,
        "weekly_summary_built",
        category=category,
        weeks=len(aggregation.weeks),
        transactions=len(in_category),
        total=aggregation.total,
        has_account=bool(account),
    )

    return {
        "weeks": aggregation.weeks,
        "total": aggregation.total,
        "start": aggregation.start,
        "end": aggregation.end,
        "weekly_average": aggregation.weekly_average,
        "transactions_in_category": in_category,
        "filters_for_table": _table_filters(account, category, aggregation.start, aggregation.end),
    }


def build_category_summary(
    transactions: Any,
    projected: Any = None,
    *,
    criticality: Optional[str] = None,
    recorder: Optional[EventRecorder] = None,
    cache: Optional[ResultCache] = None,
) -> CategorySummary:
    """Aggregate raw actual and projected feeds into category totals and rows.

    Any unexpected fault is recorded and converted into the empty summary.
    """

    try:
        actual = _memo(
            cache,
            "normalized",
            (transactions,),
            lambda: normalize_transactions(transactions, recorder=recorder),
        )
        forecast = None
        if projected is not None:
            forecast = _memo(
                cache,
                "normalized_projected",
                (projected,),
                lambda: normalize_transactions(projected, recorder=recorder),
            )
        return _memo(
            cache,
            "categories",
            (actual, forecast, criticality or None),
            lambda: summarize_categories(actual, forecast, criticality=criticality, recorder=recorder),
        )
    except Exception as exc:
        emit(recorder, "category_summary_failed", criticality=criticality, error=repr(exc))
        return empty_category_summary()
