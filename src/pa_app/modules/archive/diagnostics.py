# src/pa_app/modules/archive/diagnostics.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pa_app.core.logging import get_logger

from .dates import DateMarker

logger = get_logger("pa_app.archive")


class DiagnosticKind(str, Enum):
    scan_started = "scan_started"
    year_started = "year_started"
    month_started = "month_started"
    day_started = "day_started"
    day_subdirectory = "day_subdirectory"
    non_valid_entry = "non_valid_entry"
    preset_mismatch = "preset_mismatch"
    preset_not_found = "preset_not_found"
    nested_subdirectory = "nested_subdirectory"
    listing_failed = "listing_failed"
    day_matched = "day_matched"


@dataclass(frozen=True)
class Diagnostic:
    """One traversal event. ``message`` is the human-readable line."""

    kind: DiagnosticKind
    level: int
    message: str
    path: Path | None = None
    marker: DateMarker | None = None

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)

    def __str__(self) -> str:
        return self.message


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(event: Diagnostic) -> None:
    """Default sink: forward to the app logger at the event's level."""
    logger.log(event.level, event.message)


class DiagnosticCollector:
    """Sink that keeps every event, in emission order."""

    def __init__(self) -> None:
        self.events: list[Diagnostic] = []

    def __call__(self, event: Diagnostic) -> None:
        self.events.append(event)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [e for e in self.events if e.kind == kind]

    def messages(self, min_level: int = logging.NOTSET) -> list[str]:
        return [e.message for e in self.events if e.level >= min_level]

    def count(self, level: int) -> int:
        return sum(1 for e in self.events if e.level == level)


def tee(*sinks: DiagnosticSink | None) -> DiagnosticSink:
    """Fan one event out to several sinks (None entries are ignored)."""
    targets = [s for s in sinks if s is not None]

    def _emit(event: Diagnostic) -> None:
        for sink in targets:
            sink(event)

    return _emit
