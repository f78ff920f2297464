"""
Pytest configuration and fixtures for the archive tests.

Provides:
- Archive tree builder under tmp_path
- Diagnostic collector
- Recording parser (captures which names were parsed, in order)
- JPEG writer with optional IPTC keywords
"""

from __future__ import annotations

import io
import struct
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from pa_app.core.config import get_settings
from pa_app.modules.archive.diagnostics import DiagnosticCollector
from pa_app.modules.archive.parsers import NUMERIC, RegexDirectoryDateParser


# ============ Environment Setup ============


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from PA_* variables and the cached settings."""
    for key in ("PA_ARCHIVE_ROOT", "PA_DATE_GRAMMAR", "PA_LOG_LEVEL", "PA_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============ Archive trees ============


@pytest.fixture
def make_tree(tmp_path) -> Callable[..., Path]:
    """
    Create entries relative to ``tmp_path/archive``; names ending in '/' are
    directories, everything else is a small file. Returns the archive root.
    """
    root = tmp_path / "archive"
    root.mkdir()

    def _make(*entries: str) -> Path:
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(b"not really an image")
        return root

    return _make


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


class RecordingParser(RegexDirectoryDateParser):
    """Numeric grammar that remembers every name it was asked to parse."""

    def __init__(self) -> None:
        super().__init__(**NUMERIC)
        self.calls: list[tuple[str, str]] = []

    def parse_year(self, name: str) -> int:
        self.calls.append(("year", name))
        return super().parse_year(name)

    def parse_month(self, name: str) -> int:
        self.calls.append(("month", name))
        return super().parse_month(name)

    def parse_day(self, name: str) -> int:
        self.calls.append(("day", name))
        return super().parse_day(name)

    def names(self, level: str) -> list[str]:
        return [n for lvl, n in self.calls if lvl == level]


@pytest.fixture
def recording_parser() -> RecordingParser:
    return RecordingParser()


# ============ JPEG helpers ============


def _iptc_dataset(record: int, dataset: int, value: bytes) -> bytes:
    return bytes([0x1C, record, dataset]) + struct.pack(">H", len(value)) + value


def _app13(iptc: bytes) -> bytes:
    """Photoshop 3.0 APP13 segment carrying one IPTC-NAA resource (0x0404)."""
    resource = b"8BIM" + struct.pack(">H", 0x0404) + b"\x00\x00"
    resource += struct.pack(">I", len(iptc)) + iptc
    if len(iptc) % 2:
        resource += b"\x00"
    payload = b"Photoshop 3.0\x00" + resource
    return b"\xff\xed" + struct.pack(">H", len(payload) + 2) + payload


def write_jpeg(
    path: Path, keywords: list[str] | None = None, iptc: bytes | None = None
) -> Path:
    """Small RGB JPEG; ``iptc`` embeds raw IPTC bytes as given (for corrupt blocks)."""
    buf = io.BytesIO()
    Image.new("RGB", (8, 6), color=(120, 80, 40)).save(buf, "JPEG")
    data = buf.getvalue()
    if keywords:
        iptc = b"".join(_iptc_dataset(2, 25, k.encode("utf-8")) for k in keywords)
    if iptc:
        # Right after SOI
        data = data[:2] + _app13(iptc) + data[2:]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def jpeg_writer() -> Callable[..., Path]:
    return write_jpeg


# Keywords dataset whose marker byte is 0x1D instead of 0x1C
BAD_IPTC = bytes([0x1D, 2, 25]) + struct.pack(">H", 6) + b"family"


@pytest.fixture
def broken_jpegs() -> Callable[[Path], list[Path]]:
    """
    Write three unreadable ``.jpg`` files into a directory: one with a corrupt
    IPTC block, one cut off inside its APP13 segment, and one empty file.
    """

    def _write(directory: Path) -> list[Path]:
        bad_iptc = write_jpeg(directory / "bad_iptc.jpg", iptc=BAD_IPTC)

        truncated = directory / "truncated.jpg"
        write_jpeg(truncated, keywords=["family"])
        truncated.write_bytes(truncated.read_bytes()[:30])

        empty = directory / "empty.jpg"
        empty.write_bytes(b"")
        return [bad_iptc, truncated, empty]

    return _write
