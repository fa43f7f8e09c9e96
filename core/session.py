"""Aggregation session owning one result cache and one event recorder."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from analytics.normalization import normalize_transactions
from config.settings import AggregationSettings, get_settings
from core.cache import ResultCache
from core.events import EventRecorder, LoggingEventRecorder
from core.models import CategorySummary, WeeklySummary
from core.summary_service import build_category_summary, build_weekly_summary

__all__ = ["AggregationSession"]


class AggregationSession:
    """Memoized entry point for one logical view, e.g. one dashboard panel.

    Results are shared with the cache and must be treated as read-only.
    Sessions never share state, so unrelated input sets cannot leak into
    each other.
    """

    def __init__(
        self,
        settings: Optional[AggregationSettings] = None,
        recorder: Optional[EventRecorder] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.recorder = recorder or LoggingEventRecorder(min_level=self.settings.log_level)
        self.cache = ResultCache()

    def normalized(self, transactions: Any) -> pd.DataFrame:
        return self.cache.get_or_compute(
            "normalized",
            (transactions,),
            lambda: normalize_transactions(transactions, recorder=self.recorder),
        )

    def weekly_summary(
        self,
        transactions: Any,
        category: Optional[str] = None,
        account: Optional[str] = None,
    ) -> WeeklySummary:
        return build_weekly_summary(
            transactions,
            category,
            account=account,
            settings=self.settings,
            recorder=self.recorder,
            cache=self.cache,
        )

    def category_summary(
        self,
        transactions: Any,
        projected: Any = None,
        criticality: Optional[str] = None,
    ) -> CategorySummary:
        return build_category_summary(
            transactions,
            projected,
            criticality=criticality,
            recorder=self.recorder,
            cache=self.cache,
        )

    def invalidate(self, stage: Optional[str] = None) -> None:
        self.cache.invalidate(stage)
