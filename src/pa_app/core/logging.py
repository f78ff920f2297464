# src/pa_app/core/logging.py
from __future__ import annotations

import logging
import sys

# Metadata libraries log a warning for every file without EXIF/IPTC
NOISY_LIBRARIES = ("exifread", "PIL")


def configure_logging(level: int | str = logging.INFO, json: bool = False) -> None:
    """
    Configure root + uvicorn loggers and quiet the metadata readers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers = [logging.StreamHandler(sys.stdout)]

    fmt = (
        '{"level":"%(levelname)s","time":"%(asctime)s","name":"%(name)s",'
        '"message":"%(message)s","module":"%(module)s","line":%(lineno)d}'
        if json
        else "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    )
    logging.basicConfig(level=level, handlers=handlers, format=fmt, force=True)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)

    # Only let them through when debugging
    lib_level = logging.DEBUG if level <= logging.DEBUG else logging.ERROR
    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(lib_level)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "pa_app")
