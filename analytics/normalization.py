"""Canonicalisation of raw transaction feeds into dated, numeric frames."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal
from numbers import Number
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from core.events import EventRecorder, emit
from core.models import NORMALIZED_COLUMNS, UNCATEGORIZED

__all__ = [
    "DATE_FIELDS",
    "AMOUNT_FIELDS",
    "LABEL_FIELDS",
    "empty_transactions",
    "parse_transaction_date",
    "resolve_transaction_date",
    "resolve_amount",
    "resolve_category",
    "resolve_label",
    "normalize_transactions",
]

# Probed in order; the first candidate that parses wins.
DATE_FIELDS: tuple[str, ...] = (
    "transactionDate",
    "transaction_date",
    "date",
    "postedDate",
    "posted_at",
    "posted",
    "createdAt",
    "transactedAt",
    "timestamp",
    "time",
    "dateString",
    "attributes.transactionDate",
    "attrs.transactionDate",
    "meta.transactionDate",
    "transaction.date",
    "transaction.transactionDate",
    "posted.date",
)

AMOUNT_FIELDS: tuple[str, ...] = ("amount", "value")
LABEL_FIELDS: tuple[str, ...] = ("name", "description", "payee")

MISSING_LABEL = "Unknown"

_EPOCH_MS_THRESHOLD = 1e12
_INTEGER_STRING = re.compile(r"^-?\d+$")
_HAS_DIGIT = re.compile(r"\d")
_AMOUNT_NOISE = re.compile(r"[\s,$£€]")


def empty_transactions() -> pd.DataFrame:
    """Return an empty normalized frame carrying the canonical columns."""

    return pd.DataFrame(
        {
            "date": pd.Series(dtype="datetime64[ns]"),
            "amount": pd.Series(dtype=float),
            "category": pd.Series(dtype=object),
            "label": pd.Series(dtype=object),
        }
    )


def _lookup(record: Mapping[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
        if value is None:
            return None
    return value


def _as_naive(stamp: pd.Timestamp) -> pd.Timestamp | None:
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp


def _from_epoch(number: float) -> pd.Timestamp | None:
    if not math.isfinite(number):
        return None
    unit = "s" if abs(number) < _EPOCH_MS_THRESHOLD else "ms"
    return _as_naive(pd.to_datetime(number, unit=unit))


def _seconds_and_nanos(value: Any) -> tuple[Any, Any] | None:
    if isinstance(value, Mapping):
        seconds = value.get("seconds")
        nanos = value.get("nanos", 0)
    else:
        seconds = getattr(value, "seconds", None)
        nanos = getattr(value, "nanos", 0)
    if isinstance(seconds, Number) and not isinstance(seconds, bool):
        return seconds, nanos
    return None


def parse_transaction_date(value: Any) -> pd.Timestamp | None:
    """Coerce one candidate date value to a naive timestamp, or ``None``."""

    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, (pd.Timestamp, datetime, date, np.datetime64)):
            return _as_naive(pd.Timestamp(value))

        if isinstance(value, Number):
            return _from_epoch(float(value))

        if isinstance(value, str):
            trimmed = value.strip()
            if not trimmed:
                return None
            if _INTEGER_STRING.match(trimmed):
                return _from_epoch(float(trimmed))
            # Relative words such as "now" or "today" resolve to the wall clock.
            if not _HAS_DIGIT.search(trimmed):
                return None
            return _as_naive(pd.to_datetime(trimmed, errors="coerce", utc=True))

        parts = _seconds_and_nanos(value)
        if parts is not None:
            seconds, nanos = parts
            nanos = nanos if isinstance(nanos, Number) and not isinstance(nanos, bool) else 0
            millis = float(seconds) * 1000 + math.floor(float(nanos) / 1e6)
            return _as_naive(pd.to_datetime(millis, unit="ms"))
    except (ValueError, TypeError, OverflowError):
        return None

    return None


def resolve_transaction_date(record: Mapping[str, Any]) -> pd.Timestamp | None:
    for field in DATE_FIELDS:
        parsed = parse_transaction_date(_lookup(record, field))
        if parsed is not None:
            return parsed
    return None


def _coerce_amount(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (Number, Decimal)):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
    else:
        text = _AMOUNT_NOISE.sub("", str(value))
        negative = text.startswith("(") and text.endswith(")")
        if negative:
            text = text[1:-1]
        number = pd.to_numeric(text, errors="coerce") if text else 0.0
        number = -float(number) if negative else float(number)
    return number if math.isfinite(number) else 0.0


def resolve_amount(record: Mapping[str, Any]) -> float:
    """Return the record's amount, defaulting to ``0.0`` when it is not numeric."""

    amount = record.get("amount")
    if isinstance(amount, (int, float)) and not isinstance(amount, bool):
        return float(amount) if math.isfinite(amount) else 0.0
    for field in AMOUNT_FIELDS:
        candidate = record.get(field)
        if candidate is not None and candidate != "":
            return _coerce_amount(candidate)
    return 0.0


def resolve_category(record: Mapping[str, Any]) -> str:
    category = record.get("category")
    if category is None or (isinstance(category, float) and math.isnan(category)):
        return UNCATEGORIZED
    return str(category) if category else UNCATEGORIZED


def resolve_label(record: Mapping[str, Any]) -> str:
    for field in LABEL_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and value:
            return value
    return MISSING_LABEL


def _as_record(item: Any) -> Mapping[str, Any] | None:
    if isinstance(item, Mapping):
        return item
    if item is None or isinstance(item, (str, bytes, Number)):
        return None
    try:
        return vars(item)
    except TypeError:
        return None


def _as_items(transactions: Any) -> Sequence[Any]:
    if isinstance(transactions, pd.DataFrame):
        return transactions.to_dict(orient="records")
    if isinstance(transactions, (list, tuple)):
        return transactions
    return ()


def normalize_transactions(
    transactions: Any,
    *,
    recorder: EventRecorder | None = None,
) -> pd.DataFrame:
    """Return a date-sorted frame of canonical transactions.

    Records without a parseable date are dropped, unusable amounts become
    ``0.0`` and missing categories become ``"Uncategorized"``. Unrecognised
    fields are carried through as extra columns. Never raises on malformed
    input; non-list input yields an empty frame.
    """

    items = _as_items(transactions)
    rows: list[dict[str, Any]] = []
    dropped = 0

    for item in items:
        record = _as_record(item)
        if record is None:
            dropped += 1
            continue
        when = resolve_transaction_date(record)
        if when is None:
            dropped += 1
            continue
        row = dict(record)
        row["date"] = when
        row["amount"] = resolve_amount(record)
        row["category"] = resolve_category(record)
        row["label"] = resolve_label(record)
        rows.append(row)

    emit(recorder, "transactions_normalized", input_count=len(items), normalized_count=len(rows), dropped=dropped)

    if not rows:
        return empty_transactions()

    frame = pd.DataFrame.from_records(rows)
    frame["date"] = pd.to_datetime(frame["date"])
    frame["amount"] = frame["amount"].astype(float)
    ordered = list(NORMALIZED_COLUMNS) + [column for column in frame.columns if column not in NORMALIZED_COLUMNS]
    frame = frame[ordered]
    return frame.sort_values("date", kind="mergesort", ignore_index=True)
