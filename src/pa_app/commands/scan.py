# src/pa_app/commands/scan.py
from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from pa_app.commands.common import resolve_root
from pa_app.core.config import get_settings
from pa_app.core.errors import PaAppError
from pa_app.core.logging import configure_logging
from pa_app.modules.archive.diagnostics import Diagnostic
from pa_app.modules.archive.schemas import ScanRequest, ScanResponse
from pa_app.modules.archive.service import ScanService

LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.INFO: "",
    logging.WARNING: "yellow",
    logging.ERROR: "bold red",
}


class _ScanRunner:
    def __init__(self, req: ScanRequest, show_debug: bool, list_matched: bool) -> None:
        self.req = req
        self.show_debug = show_debug
        self.list_matched = list_matched
        self.console = Console()
        self.warnings = 0
        self.errors = 0

    def _render(self, event: Diagnostic) -> None:
        if event.level >= logging.ERROR:
            self.errors += 1
        elif event.level >= logging.WARNING:
            self.warnings += 1
        if event.level < logging.INFO and not self.show_debug:
            return
        self.console.print(
            event.message,
            style=LEVEL_STYLES.get(event.level, ""),
            markup=False,
            highlight=False,
        )

    def run(self) -> ScanResponse:
        t0 = time.perf_counter()
        try:
            # Diagnostics go to the console only, not through logging again
            result = ScanService().run(self.req, sink=self._render)
        except PaAppError as err:
            raise typer.BadParameter(str(err)) from err
        elapsed = time.perf_counter() - t0

        if self.list_matched and result.matched:
            table = Table(title="Matched files", show_lines=False)
            table.add_column("File", overflow="fold")
            for p in result.matched:
                table.add_row(p)
            self.console.print(table)

        self.console.print(
            f"[SCAN] processed={result.processed_count} matched={result.matched_count} "
            f"warnings={self.warnings} errors={self.errors} in {elapsed:.2f}s",
            style="bold green" if self.errors == 0 else "bold yellow",
            markup=False,
        )
        return result


def register(app: typer.Typer) -> None:
    """Attach the archive scan command to the given Typer app."""

    @app.command("scan", help="Walk a YYYY/MM/DD archive and process every photo.")
    def scan_cmd(
        root: Path | None = typer.Argument(
            None, exists=False, file_okay=False, dir_okay=True
        ),
        year: int | None = typer.Option(None, "--year", "-y", min=1000, max=9999),
        month: int | None = typer.Option(None, "--month", "-m", min=1, max=12),
        day: int | None = typer.Option(None, "--day", "-d", min=1, max=31),
        exact: bool = typer.Option(
            False,
            "--exact",
            help="ROOT is itself the directory of the deepest preset level.",
        ),
        tag: str | None = typer.Option(
            None, "--tag", "-t", help="Only match JPEGs with this IPTC keyword."
        ),
        grammar: str | None = typer.Option(
            None, "--grammar", "-g", help="Directory naming grammar (numeric/iso)."
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug events."),
        list_matched: bool = typer.Option(
            False, "--list-matched", help="Print a table of matched files."
        ),
        json_logs: bool = typer.Option(False, "--json-logs", help="Log as JSON lines."),
    ):
        settings = get_settings()
        configure_logging(
            "DEBUG" if verbose else settings.LOG_LEVEL, json=json_logs or settings.LOG_JSON
        )

        root = resolve_root(root)
        if exact and not (year or month or day):
            raise typer.BadParameter("--exact needs --year, --month and/or --day")

        try:
            req = ScanRequest(
                root=root,
                year=year,
                month=month,
                day=day,
                exact_path=exact,
                grammar=grammar,
                tag=tag,
            )
        except ValidationError as err:
            raise typer.BadParameter(str(err)) from err

        _ScanRunner(req, show_debug=verbose, list_matched=list_matched).run()
