# src/pa_app/modules/archive/hooks.py
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from pa_app.core.logging import get_logger
from pa_app.core.media_types import JPEG_EXTS

from .dates import DateMarker
from .metadata import read_metadata
from .tags import MetadataReader, file_has_tag

logger = get_logger("pa_app.archive")


@runtime_checkable
class FileProcessor(Protocol):
    """Per-file step invoked on every leaf file; returns True when matched."""

    def __call__(
        self, path: Path, marker: DateMarker, is_day_subdirectory: bool
    ) -> bool: ...


class ReportingFileProcessor:
    """Reports every file as processed and matches all of them."""

    def __call__(
        self, path: Path, marker: DateMarker, is_day_subdirectory: bool
    ) -> bool:
        logger.info("PROCESSED image: %s", path.name)
        return True


class TaggedFileProcessor:
    """Matches JPEGs carrying ``tag`` in their IPTC keywords."""

    def __init__(
        self,
        tag: str,
        reader: MetadataReader = read_metadata,
        extensions: Iterable[str] = JPEG_EXTS,
    ) -> None:
        self.tag = tag
        self.reader = reader
        self.extensions = frozenset(extensions)

    def __call__(
        self, path: Path, marker: DateMarker, is_day_subdirectory: bool
    ) -> bool:
        if not file_has_tag(path, self.tag, reader=self.reader, extensions=self.extensions):
            return False
        logger.info("Tagged %r: %s (%s)", self.tag, path.name, marker)
        return True


class RecordingFileProcessor:
    """Wraps another processor and remembers what it saw and matched."""

    def __init__(self, inner: FileProcessor) -> None:
        self.inner = inner
        self.visited: list[tuple[Path, DateMarker, bool]] = []
        self.matched: list[Path] = []

    def __call__(
        self, path: Path, marker: DateMarker, is_day_subdirectory: bool
    ) -> bool:
        self.visited.append((path, marker, is_day_subdirectory))
        ok = self.inner(path, marker, is_day_subdirectory)
        if ok:
            self.matched.append(path)
        return ok
