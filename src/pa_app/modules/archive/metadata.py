# src/pa_app/modules/archive/metadata.py
from __future__ import annotations

import struct
from pathlib import Path

import exifread
from PIL import Image, IptcImagePlugin, UnidentifiedImageError

from pa_app.core.errors import MetadataReadFailed, NotAnImage
from pa_app.core.logging import get_logger

logger = get_logger("pa_app.metadata")

Metadata = dict[str, dict[str, str]]

# IPTC (record, dataset) -> tag name, record 2 is the application record
IPTC_TAGS: dict[tuple[int, int], str] = {
    (2, 5): "Object Name",
    (2, 15): "Category",
    (2, 25): "Keywords",
    (2, 40): "Special Instructions",
    (2, 55): "Date Created",
    (2, 60): "Time Created",
    (2, 80): "By-line",
    (2, 85): "By-line Title",
    (2, 90): "City",
    (2, 95): "Province/State",
    (2, 101): "Country/Primary Location Name",
    (2, 105): "Headline",
    (2, 110): "Credit",
    (2, 115): "Source",
    (2, 116): "Copyright Notice",
    (2, 120): "Caption/Abstract",
    (2, 122): "Caption Writer/Editor",
}

# exifread key prefix -> directory name
EXIF_GROUPS: dict[str, str] = {
    "Image": "Exif IFD0",
    "EXIF": "Exif SubIFD",
    "GPS": "GPS",
    "Interoperability": "Interoperability",
    "Thumbnail": "Exif Thumbnail",
    "MakerNote": "MakerNote",
}


def read_metadata(path: Path) -> Metadata:
    """
    Read embedded metadata as ``{directory name: {tag name: description}}``.

    Raises NotAnImage when the file is not a recognisable image and
    MetadataReadFailed when it cannot be read at all.
    """
    path = Path(path)
    try:
        with Image.open(path) as im:
            fmt = im.format or "Image"
            width, height = im.size
            iptc = IptcImagePlugin.getiptcinfo(im) or {}
    except UnidentifiedImageError as err:
        raise NotAnImage(f"Not an image file: {path}") from err
    except OSError as err:
        raise MetadataReadFailed(f"Cannot read {path}: {err}") from err
    except (SyntaxError, ValueError, IndexError, struct.error) as err:
        # getiptcinfo raises SyntaxError("invalid IPTC/NAA file") on a bad resource
        raise MetadataReadFailed(f"Corrupt image {path}: {err}") from err

    result: Metadata = {
        fmt: {"Image Width": f"{width} pixels", "Image Height": f"{height} pixels"}
    }
    iptc_tags = _iptc_directory(iptc)
    if iptc_tags:
        result["IPTC"] = iptc_tags
    for group, tags in _exif_directories(path).items():
        result.setdefault(group, {}).update(tags)
    return result


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace").strip("\x00 ")
    return str(raw)


def _iptc_directory(iptc: dict) -> dict[str, str]:
    tags: dict[str, str] = {}
    for (record, dataset), value in sorted(iptc.items()):
        name = IPTC_TAGS.get((record, dataset), f"Unknown tag ({record}:{dataset})")
        # Repeatable datasets (Keywords, Category...) come back as lists
        values = value if isinstance(value, list) else [value]
        tags[name] = ";".join(_decode(v) for v in values)
    return tags


def _exif_directories(path: Path) -> Metadata:
    try:
        with path.open("rb") as f:
            tags = exifread.process_file(f, details=False)
    except Exception as err:
        logger.debug("EXIF not readable for %s: %s", path.name, err)
        return {}

    groups: Metadata = {}
    for key, value in tags.items():
        prefix, _, name = key.partition(" ")
        if not name:
            continue
        group = EXIF_GROUPS.get(prefix, prefix)
        groups.setdefault(group, {})[name] = str(value)
    return groups
