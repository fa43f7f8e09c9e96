"""Category and criticality filters over normalized transaction frames."""

from __future__ import annotations

from typing import Any

import pandas as pd

from core.events import EventRecorder, emit

__all__ = [
    "filter_by_category",
    "filter_by_criticality",
    "merge_transaction_sets",
]


def filter_by_category(
    transactions: pd.DataFrame,
    category: str | None = None,
    *,
    recorder: EventRecorder | None = None,
) -> pd.DataFrame:
    """Return rows whose category equals ``category`` exactly.

    Without a category the input frame itself is returned.
    """

    if not category:
        return transactions

    filtered = transactions[transactions["category"] == category].reset_index(drop=True)
    emit(
        recorder,
        "transactions_filtered",
        category=category,
        input_count=len(transactions),
        filtered_count=len(filtered),
    )
    return filtered


def filter_by_criticality(transactions: pd.DataFrame, criticality: str | None = None) -> pd.DataFrame:
    """Return rows whose ``criticality`` matches case-insensitively."""

    if not criticality:
        return transactions
    if "criticality" not in transactions.columns:
        return transactions.iloc[0:0].reset_index(drop=True)

    wanted = str(criticality).lower()
    mask = transactions["criticality"].fillna("").astype(str).str.lower() == wanted
    return transactions[mask].reset_index(drop=True)


def merge_transaction_sets(*feeds: Any) -> list[Any]:
    """Concatenate several raw feeds (e.g. personal and joint) into one list."""

    merged: list[Any] = []
    for feed in feeds:
        if isinstance(feed, (list, tuple)):
            merged.extend(feed)
    return merged
