# src/pa_app/modules/archive/engine.py
from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pa_app.core.errors import InvalidConfiguration

from .dates import DateMarker
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from .hooks import FileProcessor, ReportingFileProcessor
from .parsers import DirectoryDateParser, get_parser


class ArchiveTraversalEngine:
    """
    Walks ``root/YYYY/MM/DD/[subdir/]files`` and hands every leaf file to a
    file processor.

    Year, month and day directories are visited in lexicographic name order
    so runs are reproducible. A ``preset`` marker narrows the walk to one
    year/month/day; with ``exact_path`` the root itself is the directory of
    the deepest level set in the preset. The filesystem is only read.
    """

    def __init__(
        self,
        root_path: Path | str,
        preset: DateMarker | None = None,
        exact_path: bool = False,
        parser: DirectoryDateParser | None = None,
        file_processor: FileProcessor | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        if exact_path and preset is None:
            raise InvalidConfiguration(
                "Exact path must be set with pre-set date marker only!"
            )
        self.root_path = Path(root_path)
        self.preset = preset
        self.exact_path = exact_path
        self.parser = parser or get_parser()
        self.file_processor = file_processor or ReportingFileProcessor()
        self.sink = sink or log_diagnostic

    # ---- preset queries ------------------------------------------------------
    def has_preset_year(self) -> bool:
        return self.preset is not None and self.preset.has_year()

    def has_preset_month(self) -> bool:
        return self.preset is not None and self.preset.has_month()

    def has_preset_day(self) -> bool:
        return self.preset is not None and self.preset.has_day()

    # ---- public API ----------------------------------------------------------
    def process(self) -> None:
        if self.exact_path:
            if self.preset.has_day():
                self.process_day_dir(self.root_path, self.preset, False)
            elif self.preset.has_month():
                self.process_month_dir(self.root_path, self.preset)
            else:
                self.process_year_dir(self.root_path, self.preset)
            return

        self._emit(
            DiagnosticKind.scan_started,
            f"Starting to scan the root path: {self.root_path}",
            path=self.root_path,
        )

        year_found = False
        for entry in self._list_sorted(self.root_path):
            if not entry.is_dir():
                continue
            year = self.parser.parse_year(entry.name)
            if year == 0:
                continue
            if self.has_preset_year() and self.preset.year != year:
                continue
            year_found = True
            self.process_year_dir(entry, DateMarker(year))

        if self.has_preset_year() and not year_found:
            self._emit(
                DiagnosticKind.preset_not_found,
                "Preset year not found.",
                level=logging.WARNING,
                path=self.root_path,
                marker=self.preset,
            )

    def process_year_dir(self, year_dir: Path, marker: DateMarker) -> None:
        self._emit(
            DiagnosticKind.year_started,
            f"Processing the year: {marker.year}",
            path=year_dir,
            marker=marker,
        )
        self._process_level(
            year_dir,
            parse=self.parser.parse_month,
            preset_value=self.preset.month if self.has_preset_month() else 0,
            descend=lambda d, month: self.process_month_dir(d, marker.with_month(month)),
            label="month",
        )

    def process_month_dir(self, month_dir: Path, marker: DateMarker) -> None:
        self._emit(
            DiagnosticKind.month_started,
            f"Processing the month: {marker.month}",
            path=month_dir,
            marker=marker,
        )
        self._process_level(
            month_dir,
            parse=self.parser.parse_day,
            preset_value=self.preset.day if self.has_preset_day() else 0,
            descend=lambda d, day: self.process_day_dir(d, marker.with_day(day), False),
            label="day",
        )

    def process_day_dir(
        self, day_dir: Path, marker: DateMarker, is_day_subdirectory: bool
    ) -> int:
        """Process the leaf files of a day directory; returns the match count."""
        if not is_day_subdirectory:
            self._emit(
                DiagnosticKind.day_started,
                f"Processing the day: {marker.day}",
                path=day_dir,
                marker=marker,
            )

        matched = 0
        for entry in self._list_sorted(day_dir):
            if entry.is_dir():
                if is_day_subdirectory:
                    self._emit(
                        DiagnosticKind.nested_subdirectory,
                        f"Days could not contain two levels of subdirectories: {entry}",
                        level=logging.ERROR,
                        path=entry,
                        marker=marker,
                    )
                    continue
                self._emit(
                    DiagnosticKind.day_subdirectory,
                    f"Processing day subdirectory: {entry.name}",
                    path=entry,
                    marker=marker,
                )
                self.process_day_dir(entry, marker, True)
                continue
            if self.file_processor(entry, marker, is_day_subdirectory):
                matched += 1

        if matched > 0:
            self._emit(
                DiagnosticKind.day_matched,
                f"MATCHED {matched}",
                path=day_dir,
                marker=marker,
            )
        return matched

    # ---- helpers -------------------------------------------------------------
    def _process_level(
        self,
        parent: Path,
        parse: Callable[[str], int],
        preset_value: int,
        descend: Callable[[Path, int], None],
        label: str,
    ) -> None:
        found = False
        for entry in self._list_sorted(parent):
            if not entry.is_dir():
                continue
            value = parse(entry.name)
            if value == 0:
                self._emit(
                    DiagnosticKind.non_valid_entry,
                    f"Non valid directory: {entry.name}",
                    path=entry,
                )
                continue
            if preset_value and value != preset_value:
                self._emit(
                    DiagnosticKind.preset_mismatch,
                    f"Skipping directory not matching preset: {entry.name}",
                    level=logging.DEBUG,
                    path=entry,
                )
                continue
            found = True
            descend(entry, value)

        if preset_value and not found:
            self._emit(
                DiagnosticKind.preset_not_found,
                f"Preset {label} not found.",
                level=logging.WARNING,
                path=parent,
                marker=self.preset,
            )

    def _list_sorted(self, directory: Path) -> list[Path]:
        try:
            names = sorted(p.name for p in directory.iterdir())
        except OSError as err:
            self._emit(
                DiagnosticKind.listing_failed,
                f"Could not list directory: {directory} ({err.strerror or err})",
                level=logging.ERROR,
                path=directory,
            )
            return []
        return [directory / name for name in names]

    def _emit(
        self,
        kind: DiagnosticKind,
        message: str,
        level: int = logging.INFO,
        path: Path | None = None,
        marker: DateMarker | None = None,
    ) -> None:
        self.sink(Diagnostic(kind=kind, level=level, message=message, path=path, marker=marker))
