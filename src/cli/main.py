"""CLI principal (Typer + Rich).

Comandos:
- `stats`: ejecuta la agregación y muestra tablas (o JSON con `--raw`).
- `doctor`: diagnósticos y configuración interactiva.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.json_exporter import dump_json, export_skill_stats_json
from cli import doctor
from cli.ui_components import (
    build_github_table,
    build_languages_table,
    build_leetcode_table,
    build_wakatime_table,
    print_banner,
)
from core.config import AppSettings
from core.services.skill_stats import collect_skill_stats

app = typer.Typer(no_args_is_help=True, help="Live coding statistics for a portfolio Skill section.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Logs a stderr con Rich; stdout queda libre para `--raw`."""

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=False, show_path=False)],
        force=True,
    )


@app.command()
def stats(
    json_path: Optional[Path] = typer.Option(
        None,
        "--json",
        help="Write the aggregated snapshot to this JSON file.",
    ),
    raw: bool = typer.Option(False, "--raw", help="Print the snapshot as JSON instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level."),
) -> None:
    """Fetch WakaTime, GitHub and LeetCode stats (with fallbacks)."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    configure_logging("INFO" if verbose else settings.log_level)

    result = asyncio.run(collect_skill_stats(settings=settings))

    if json_path is not None:
        export_skill_stats_json(stats=result, output_path=json_path)

    if raw:
        typer.echo(dump_json(result), nl=False)
        return

    print_banner(_console, github_user=settings.github_username, leetcode_user=settings.leetcode_username)
    _console.print(build_wakatime_table(result.wakatime, result.wakatime_week))
    _console.print(build_languages_table(result.wakatime_week))
    _console.print(build_github_table(result.github))
    _console.print(build_leetcode_table(result.leetcode))
    if json_path is not None:
        _console.print(f"[green]Snapshot saved to:[/green] {json_path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
