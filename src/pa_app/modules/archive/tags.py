# src/pa_app/modules/archive/tags.py
from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from pathlib import Path

from pa_app.core.errors import MetadataReadFailed, NotAnImage
from pa_app.core.logging import get_logger
from pa_app.core.media_types import JPEG_EXTS

from .metadata import Metadata, read_metadata

logger = get_logger("pa_app.tags")

MetadataReader = Callable[[Path], Metadata]


def file_extension(path: Path | str) -> str:
    """Lowercased text after the last dot; '' for 'name' and '.hidden'."""
    name = Path(path).name.lower()
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot + 1 :]


def file_has_extension(path: Path | str, allowed: Iterable[str]) -> bool:
    normalized = {e.lower().lstrip(".") for e in allowed}
    return file_extension(path) in normalized


def file_has_tag(
    path: Path | str,
    tag: str | None,
    reader: MetadataReader = read_metadata,
    extensions: Iterable[str] = JPEG_EXTS,
) -> bool:
    """
    True when ``path`` is a JPEG whose IPTC Keywords contain ``tag`` as a
    whole word (case-sensitive). Unreadable files never match.
    """
    if not tag:
        return False

    path = Path(path)
    if not file_has_extension(path, extensions):
        return False

    try:
        metadata = reader(path)
    except NotAnImage:
        logger.info("Probably not image file: %s", path.name)
        return False
    except MetadataReadFailed:
        logger.info("File reading error: %s", path.name)
        return False

    pattern = re.compile(rf"\b{re.escape(tag)}\b")
    keywords = metadata.get("IPTC", {}).get("Keywords")
    return keywords is not None and pattern.search(keywords) is not None
