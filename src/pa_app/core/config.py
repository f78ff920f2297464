# src/pa_app/core/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pa_app.core.media_types import JPEG_EXTS


class Settings(BaseSettings):
    """
    App settings (12-factor). Override via env vars, e.g.
      PA_ARCHIVE_ROOT=/data/photos  PA_DATE_GRAMMAR=iso
    """

    # App
    DEBUG: bool = False

    # Archive
    ARCHIVE_ROOT: Path | None = None  # default root when none is passed
    DATE_GRAMMAR: str = "numeric"  # directory naming convention
    JPEG_EXTS: set[str] = Field(default_factory=lambda: set(JPEG_EXTS))

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_prefix="PA_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("ARCHIVE_ROOT")
    @classmethod
    def _expand_root(cls, p: Path | None) -> Path | None:
        return p.expanduser() if p is not None else None

    @field_validator("DATE_GRAMMAR")
    @classmethod
    def _known_grammar(cls, name: str) -> str:
        from pa_app.modules.archive.parsers import GRAMMARS

        name = name.strip().lower()
        if name not in GRAMMARS:
            raise ValueError(
                f"unknown date grammar {name!r}; expected one of {sorted(GRAMMARS)}"
            )
        return name

    @field_validator("JPEG_EXTS")
    @classmethod
    def _normalize_exts(cls, exts: set[str]) -> set[str]:
        return {e.lower().lstrip(".") for e in exts if e.strip()}

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, level: str) -> str:
        return level.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    FastAPI-friendly cached getter. Use Depends(get_settings) where needed.
    """
    return Settings()
