"""Tests for the logging-backed event recorder and package exports."""

from __future__ import annotations

import importlib
import logging

from core.events import LoggingEventRecorder, NullEventRecorder, emit


def test_logging_recorder_writes_info_and_error_records(caplog):
    caplog.set_level(logging.INFO, logger="statementspend")
    recorder = LoggingEventRecorder()

    recorder.record("weekly_totals_computed", {"weeks": 3})
    recorder.record("weekly_summary_failed", {"error": "RuntimeError('boom')"})

    levels = [record.levelname for record in caplog.records]
    assert levels == ["INFO", "ERROR"]
    assert "weekly_totals_computed" in caplog.records[0].getMessage()
    assert "boom" in caplog.records[1].getMessage()


def test_logging_recorder_respects_min_level(caplog):
    caplog.set_level(logging.DEBUG, logger="statementspend")
    recorder = LoggingEventRecorder(min_level="error")

    recorder.record("transactions_normalized", {"input_count": 1})
    recorder.record("category_summary_failed", {"error": "ValueError()"})

    assert [record.levelname for record in caplog.records] == ["ERROR"]


def test_emit_without_recorder_is_a_no_op():
    emit(None, "anything", value=1)
    NullEventRecorder().record("anything", {"value": 1})


def test_packages_export_entry_points():
    analytics = importlib.import_module("analytics")
    session = importlib.import_module("core.session")

    assert hasattr(analytics, "normalize_transactions")
    assert hasattr(analytics, "bucketize_weeks")
    assert hasattr(session, "AggregationSession")
