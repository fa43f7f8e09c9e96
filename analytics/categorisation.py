"""Category aggregation with actual versus projected breakdowns."""

from __future__ import annotations

import math
import unicodedata
from types import MappingProxyType
from typing import Mapping, Tuple

import pandas as pd

from analytics.filtering import filter_by_criticality
from core.events import EventRecorder, emit
from core.models import CategoryRow, CategorySummary, CategoryTotal

__all__ = [
    "category_sort_key",
    "compute_category_totals",
    "compute_projected_total",
    "build_category_rows",
    "build_category_breakdown",
    "summarize_categories",
]


def category_sort_key(name: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering with a deterministic tie-break."""

    folded = unicodedata.normalize("NFKD", name)
    folded = "".join(char for char in folded if not unicodedata.combining(char))
    return folded.casefold(), name


def _sum_by_category(transactions: pd.DataFrame) -> pd.Series:
    if transactions.empty:
        return pd.Series(dtype=float)
    return transactions.groupby("category", sort=False)["amount"].sum().astype(float)


def compute_category_totals(
    actual: pd.DataFrame,
    projected: pd.DataFrame | None = None,
    *,
    recorder: EventRecorder | None = None,
) -> Tuple[Mapping[str, CategoryTotal], float]:
    """Return per-category actual/projected sums and the actual grand total.

    Projected amounts never contribute to the grand total.
    """

    actual_totals = _sum_by_category(actual)
    projected_totals = _sum_by_category(projected) if projected is not None else pd.Series(dtype=float)

    categories = list(actual_totals.index) + [name for name in projected_totals.index if name not in actual_totals.index]
    totals = {
        str(name): CategoryTotal(
            actual=float(actual_totals.get(name, 0.0)),
            projected=float(projected_totals.get(name, 0.0)),
        )
        for name in categories
    }
    total_sum = float(actual_totals.sum()) if not actual_totals.empty else 0.0

    emit(
        recorder,
        "category_totals_computed",
        categories=len(totals),
        actual_count=len(actual),
        projected_count=0 if projected is None else len(projected),
        total_sum=total_sum,
    )
    return MappingProxyType(totals), total_sum


def compute_projected_total(projected: pd.DataFrame | None) -> float:
    if projected is None or projected.empty:
        return 0.0
    return float(projected["amount"].sum())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_category_rows(totals: Mapping[str, CategoryTotal], total_sum: float) -> list[CategoryRow]:
    """Return display rows sorted by category name with percentage shares."""

    rows: list[CategoryRow] = []
    for name in sorted(totals, key=category_sort_key):
        entry = totals[name]
        actual_percent = entry.actual / total_sum * 100 if total_sum > 0 else 0.0
        if total_sum > 0:
            combined_percent = (entry.actual + entry.projected) / total_sum * 100
        else:
            combined_percent = actual_percent
        rows.append(
            {
                "category": name,
                "actual": entry.actual,
                "projected": entry.projected,
                "actual_percent": actual_percent,
                "combined_percent": combined_percent,
                "percent_label": _round_half_up(combined_percent),
                "projected_only": entry.actual == 0 and entry.projected > 0,
            }
        )
    return rows


def build_category_breakdown(rows: list[CategoryRow]) -> pd.DataFrame:
    """Return the category rows as a frame for tabular consumers."""

    columns = [
        "Category",
        "Actual",
        "Projected",
        "ActualPercent",
        "CombinedPercent",
        "PercentLabel",
        "ProjectedOnly",
    ]
    if not rows:
        return pd.DataFrame(columns=columns)

    breakdown = pd.DataFrame.from_records(rows)
    breakdown = breakdown.rename(
        columns={
            "category": "Category",
            "actual": "Actual",
            "projected": "Projected",
            "actual_percent": "ActualPercent",
            "combined_percent": "CombinedPercent",
            "percent_label": "PercentLabel",
            "projected_only": "ProjectedOnly",
        }
    )
    return breakdown[columns]


def summarize_categories(
    actual: pd.DataFrame,
    projected: pd.DataFrame | None = None,
    *,
    criticality: str | None = None,
    recorder: EventRecorder | None = None,
) -> CategorySummary:
    """Aggregate actual and projected spend into a category summary."""

    if projected is not None:
        projected = filter_by_criticality(projected, criticality)

    totals, total_sum = compute_category_totals(actual, projected, recorder=recorder)
    rows = build_category_rows(totals, total_sum)
    return {
        "totals": totals,
        "rows": rows,
        "total_sum": total_sum,
        "projected_total": compute_projected_total(projected),
        "breakdown": build_category_breakdown(rows),
    }
