# src/pa_app/cli.py
from __future__ import annotations

import typer

from pa_app.commands.scan import register as register_scan
from pa_app.version import get_version

app = typer.Typer(help="Photo Archive Processor CLI")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the installed version and exit.",
    ),
) -> None:
    pass


register_scan(app)


if __name__ == "__main__":
    app()
