"""Shared data model definitions for the StatementSpend aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, TypedDict

import pandas as pd

UNCATEGORIZED = "Uncategorized"

NORMALIZED_COLUMNS = ("date", "amount", "category")


@dataclass(frozen=True)
class WeekBucket:
    """Half-open ``[start, end)`` window of one statement week."""

    start: pd.Timestamp
    end: pd.Timestamp
    total: float
    count: int

    def contains(self, moment: pd.Timestamp) -> bool:
        day = pd.Timestamp(moment).normalize()
        return self.start <= day < self.end


@dataclass(frozen=True)
class AggregationResult:
    weeks: tuple[WeekBucket, ...]
    total: float
    start: pd.Timestamp | None
    end: pd.Timestamp | None
    weekly_average: float = 0.0


@dataclass(frozen=True)
class CategoryTotal:
    actual: float
    projected: float


class CategoryRow(TypedDict):
    category: str
    actual: float
    projected: float
    actual_percent: float
    combined_percent: float
    percent_label: int
    projected_only: bool


class CategorySummary(TypedDict):
    totals: Mapping[str, CategoryTotal]
    rows: list[CategoryRow]
    total_sum: float
    projected_total: float
    breakdown: pd.DataFrame


class TableFilters(TypedDict):
    account: str | None
    category: str | None
    start_date: pd.Timestamp | None
    end_date: pd.Timestamp | None


class WeeklySummary(TypedDict):
    weeks: tuple[WeekBucket, ...]
    total: float
    start: pd.Timestamp | None
    end: pd.Timestamp | None
    weekly_average: float
    transactions_in_category: pd.DataFrame
    filters_for_table: TableFilters


__all__ = [
    "UNCATEGORIZED",
    "NORMALIZED_COLUMNS",
    "WeekBucket",
    "AggregationResult",
    "CategoryTotal",
    "CategoryRow",
    "CategorySummary",
    "TableFilters",
    "WeeklySummary",
]
