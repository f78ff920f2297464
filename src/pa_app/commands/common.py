# src/pa_app/commands/common.py
from __future__ import annotations

from pathlib import Path

import typer

from pa_app.core.config import get_settings


def prompt_existing_dir(maybe_root: Path | None, prompt_label: str = "root") -> Path:
    root = maybe_root or Path(typer.prompt(f"{prompt_label} (folder)")).expanduser()
    if not root.exists() or not root.is_dir():
        raise typer.BadParameter(
            f"{prompt_label} does not exist or is not a directory: {root}"
        )
    return root


def resolve_root(root: Path | None) -> Path:
    """Explicit argument, then PA_ARCHIVE_ROOT, then an interactive prompt."""
    return prompt_existing_dir(root or get_settings().ARCHIVE_ROOT, "root")
