"""Statement-week bucketing and weekly average helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from analytics.filtering import filter_by_category
from config.settings import DEFAULT_STATEMENT_CLOSE_DAY, DEFAULT_WEEK_LENGTH_DAYS
from core.events import EventRecorder, emit
from core.models import AggregationResult, WeekBucket

__all__ = [
    "snap_to_statement_week",
    "bucketize_weeks",
    "weeks_for_average",
    "compute_weekly_average",
    "empty_aggregation",
]


def empty_aggregation() -> AggregationResult:
    return AggregationResult(weeks=(), total=0.0, start=None, end=None, weekly_average=0.0)


def snap_to_statement_week(moment: pd.Timestamp, statement_close_day: int) -> pd.Timestamp:
    """Return midnight of the closest day on or before ``moment`` falling on the close weekday."""

    day = pd.Timestamp(moment).normalize()
    offset = (day.weekday() - statement_close_day) % 7
    return day - pd.Timedelta(days=offset)


def weeks_for_average(weeks: Sequence[WeekBucket]) -> Sequence[WeekBucket]:
    """Drop a single trailing bucket when it holds no spend yet."""

    if len(weeks) > 0 and weeks[-1].total == 0:
        return weeks[:-1]
    return weeks


def compute_weekly_average(
    weeks: Sequence[WeekBucket],
    total: float | None = None,
    *,
    recorder: EventRecorder | None = None,
) -> float:
    used = weeks_for_average(weeks)
    if len(used) == 0:
        return 0.0

    if total is None:
        total = float(sum(week.total for week in weeks))
    average = float(total) / max(1, len(used))
    emit(recorder, "weekly_average_computed", weekly_average=average, total=total, week_count=len(used))
    return average


def bucketize_weeks(
    transactions: pd.DataFrame,
    category: str | None = None,
    *,
    week_length_days: int = DEFAULT_WEEK_LENGTH_DAYS,
    statement_close_day: int = DEFAULT_STATEMENT_CLOSE_DAY,
    recorder: EventRecorder | None = None,
) -> AggregationResult:
    """Partition normalized transactions into contiguous statement weeks.

    The span runs from the close-weekday on or before the earliest
    transaction up to the latest transaction; bucket starts are generated
    every ``week_length_days`` days while they do not exceed that latest
    date, so the final bucket may reach past it. Each transaction lands in
    the bucket whose ``[start, end)`` holds its calendar day. When
    ``category`` is given only matching transactions are summed, over the
    span of the full frame.
    """

    if transactions.empty:
        emit(recorder, "weekly_totals_skipped", reason="no transactions")
        return empty_aggregation()

    period_start = snap_to_statement_week(transactions["date"].min(), statement_close_day)
    period_end = pd.Timestamp(transactions["date"].max())
    step = pd.Timedelta(days=week_length_days)
    starts = pd.date_range(period_start, period_end, freq=step)

    selected = filter_by_category(transactions, category, recorder=recorder)
    offsets = (selected["date"].dt.normalize() - period_start).dt.days.to_numpy(dtype=np.int64)
    positions = offsets // week_length_days
    amounts = selected["amount"].to_numpy(dtype=float)

    totals = np.bincount(positions, weights=amounts, minlength=len(starts))
    counts = np.bincount(positions, minlength=len(starts))

    weeks = tuple(
        WeekBucket(start=start, end=start + step, total=float(total), count=int(count))
        for start, total, count in zip(starts, totals, counts)
    )
    total_sum = float(sum(week.total for week in weeks))
    weekly_average = compute_weekly_average(weeks, total_sum, recorder=recorder)

    emit(
        recorder,
        "weekly_totals_computed",
        category=category,
        input_count=len(transactions),
        filtered_count=len(selected),
        weeks=len(weeks),
        start=period_start.date().isoformat(),
        end=period_end.date().isoformat(),
        total=total_sum,
    )

    return AggregationResult(
        weeks=weeks,
        total=total_sum,
        start=period_start,
        end=period_end,
        weekly_average=weekly_average,
    )
