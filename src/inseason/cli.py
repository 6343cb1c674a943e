"""Typer CLI entrypoint for inseason."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from .core import CoreError, InsufficientSeasons, classify_season
from .engine import ConsoleSink, TaskOutcome, run_tasks
from .exceptions import ConfigError, InseasonError
from .records import RecordDataError


EXIT_SUCCESS = 0
EXIT_INTERNAL_ERROR = 1
EXIT_DATA_ERROR = 2
EXIT_USAGE_ERROR = 3
EXIT_IO_ERROR = 4
EXIT_CONFIG_ERROR = 5


app = typer.Typer(help="Season statistics for iNaturalist observation exports")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """Base command callback configuring logging."""

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("run")
def run_command(
    configs: List[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Task configuration files (TOML)",
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Tasks to run in parallel"),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Override the output format of every task (markdown, html, json)",
    ),
) -> None:
    """Build season reports for each configuration."""

    if fmt is not None and fmt not in {"markdown", "html", "json"}:
        typer.echo(f"Unsupported format: {fmt}", err=True)
        raise typer.Exit(EXIT_USAGE_ERROR)

    outcomes = run_tasks(configs, console=ConsoleSink(typer.echo), jobs=jobs, fmt=fmt)
    for outcome in outcomes:
        if outcome.error is not None:
            typer.echo(f"{outcome.config_path}: {outcome.error}", err=True)
            if isinstance(outcome.error, InsufficientSeasons):
                typer.echo(f"{outcome.config_path}: {_lost_hint(outcome.error)}", err=True)
        elif outcome.destination is not None:
            typer.echo(f"{outcome.config_path}: wrote {outcome.destination}", err=True)

    code = exit_code_for(outcomes)
    if code != EXIT_SUCCESS:
        raise typer.Exit(code)


@app.command("season")
def season_command(
    when: str = typer.Argument(..., help="Observation date (YYYY-MM-DD)"),
    first_month: int = typer.Option(1, "--first-month", min=1, max=12),
    last_month: int = typer.Option(12, "--last-month", min=1, max=12),
) -> None:
    """Print the season label a date falls into."""

    try:
        observed = date.fromisoformat(when)
    except ValueError as exc:
        typer.echo(f"Invalid date: {when}", err=True)
        raise typer.Exit(EXIT_USAGE_ERROR) from exc
    typer.echo(classify_season(observed, first_month, last_month))


def exit_code_for(outcomes: Sequence[TaskOutcome]) -> int:
    errors = [outcome.error for outcome in outcomes if outcome.error is not None]
    if not errors:
        return EXIT_SUCCESS
    if any(isinstance(error, ConfigError) for error in errors):
        return EXIT_CONFIG_ERROR
    if any(isinstance(error, (RecordDataError, CoreError)) for error in errors):
        return EXIT_DATA_ERROR
    if any(not isinstance(error, InseasonError) for error in errors):
        return EXIT_INTERNAL_ERROR
    return EXIT_IO_ERROR


def _lost_hint(error: InsufficientSeasons) -> str:
    if error.season_count < 2:
        return "lost taxa need records from at least two seasons"
    return f"set modern_window to at most {error.season_count - 1} in the task config"
