# src/pa_app/core/media_types.py
from __future__ import annotations

# Extensions without the leading dot, compared against lowercased names
JPEG_EXTS: frozenset[str] = frozenset({"jpg", "jpeg"})
