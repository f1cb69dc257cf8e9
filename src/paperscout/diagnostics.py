"""Structured progress and diagnostic events emitted by the harvesting core.

Components never own a logger lifecycle of their own for run events: the
pipeline receives one sink and passes it down to every component it drives.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Event categories
ENUMERATION_START = "enumeration-start"
ENUMERATION_COMPLETE = "enumeration-complete"
ENUMERATION_FAILED = "enumeration-failed"
SELECTOR_ATTEMPT = "selector-attempt"
REFERENCE_DROPPED = "reference-dropped"
PAPER_START = "paper-start"
PAPER_SUCCEEDED = "paper-succeeded"
PAPER_PARTIAL = "paper-partial"
PAPER_FAILED = "paper-failed"
FIELD_FAILED = "field-failed"
RUN_COMPLETE = "run-complete"

_WARNING_CATEGORIES = {ENUMERATION_FAILED, REFERENCE_DROPPED, PAPER_FAILED, FIELD_FAILED}
_DEBUG_CATEGORIES = {SELECTOR_ATTEMPT}


@dataclass
class DiagnosticEvent:
    """One progress or diagnostic event."""

    category: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receiver for diagnostic events."""

    def emit(self, category: str, message: str, payload: dict[str, Any] | None = None) -> None:
        ...


class LoggingDiagnostics:
    """Sink that forwards events to ``logging`` and keeps them for the run.

    Selector attempts are logged at DEBUG, failures at WARNING and everything
    else at INFO.
    """

    def __init__(self, log: logging.Logger | None = None, keep_events: bool = True):
        self._log = log or logger
        self._keep_events = keep_events
        self.events: list[DiagnosticEvent] = []

    def emit(self, category: str, message: str, payload: dict[str, Any] | None = None) -> None:
        event = DiagnosticEvent(category=category, message=message, payload=dict(payload or {}))
        if self._keep_events:
            self.events.append(event)

        if category in _WARNING_CATEGORIES:
            level = logging.WARNING
        elif category in _DEBUG_CATEGORIES:
            level = logging.DEBUG
        else:
            level = logging.INFO

        if event.payload:
            self._log.log(level, "[%s] %s %s", category, message, event.payload)
        else:
            self._log.log(level, "[%s] %s", category, message)

    def of_category(self, category: str) -> list[DiagnosticEvent]:
        """Events recorded so far for one category."""
        return [e for e in self.events if e.category == category]


class NullDiagnostics:
    """Sink that discards every event."""

    def emit(self, category: str, message: str, payload: dict[str, Any] | None = None) -> None:
        return None


__all__ = [
    "DiagnosticEvent",
    "DiagnosticsSink",
    "LoggingDiagnostics",
    "NullDiagnostics",
    "ENUMERATION_START",
    "ENUMERATION_COMPLETE",
    "ENUMERATION_FAILED",
    "SELECTOR_ATTEMPT",
    "REFERENCE_DROPPED",
    "PAPER_START",
    "PAPER_SUCCEEDED",
    "PAPER_PARTIAL",
    "PAPER_FAILED",
    "FIELD_FAILED",
    "RUN_COMPLETE",
]
