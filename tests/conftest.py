"""Shared fixtures for the StatementSpend test-suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Mapping

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class RecordingRecorder:
    """Event recorder that keeps every event for later assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def record(self, event: str, fields: Mapping[str, Any]) -> None:
        self.events.append((event, dict(fields)))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture()
def recorder() -> RecordingRecorder:
    return RecordingRecorder()


@pytest.fixture()
def scenario_transactions() -> list[dict[str, Any]]:
    return [
        {"date": "2024-01-03", "amount": 20, "category": "Food"},
        {"date": "2024-01-10", "amount": 30, "category": "Food"},
        {"date": "2024-01-15", "amount": 10, "category": "Rent"},
    ]


@pytest.fixture()
def projected_transactions() -> list[dict[str, Any]]:
    return [
        {"transactionDate": "2024-01-20", "amount": "25.00", "category": "Food", "criticality": "Essential"},
        {"transactionDate": "2024-01-22", "amount": 15, "category": "Travel", "criticality": "Nonessential"},
        {"transactionDate": "2024-01-25", "amount": 5, "category": "Rent", "criticality": "essential"},
    ]
