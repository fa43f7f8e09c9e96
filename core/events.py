"""Observability collaborator injected into every aggregation stage."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

__all__ = [
    "EventRecorder",
    "LoggingEventRecorder",
    "NullEventRecorder",
    "emit",
]

LOGGER_NAME = "statementspend"


class EventRecorder(Protocol):
    def record(self, event: str, fields: Mapping[str, Any]) -> None:
        ...


class LoggingEventRecorder:
    """Forward recorded events to the standard logging module."""

    def __init__(self, logger: logging.Logger | None = None, min_level: int | str = logging.INFO) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        if isinstance(min_level, str):
            min_level = logging.getLevelName(min_level.upper())
        self.min_level = min_level if isinstance(min_level, int) else logging.INFO

    def record(self, event: str, fields: Mapping[str, Any]) -> None:
        level = logging.ERROR if "error" in fields else logging.INFO
        if level < self.min_level:
            return
        self.logger.log(level, "%s %s", event, dict(fields))


class NullEventRecorder:
    def record(self, event: str, fields: Mapping[str, Any]) -> None:
        return None


def emit(recorder: EventRecorder | None, event: str, **fields: Any) -> None:
    """Record ``event`` when a recorder was supplied."""

    if recorder is not None:
        recorder.record(event, fields)
