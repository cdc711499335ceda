# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point rendering markers for a single source file."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Final

import typer
from rich.table import Table

from .analysis import MypyAnalysis
from .config import MarkerConfig, load_config
from .document import TextDocument
from .errors import TypemarksError
from .logging import configure_verbose_logging, fail, get_console, ok, warn
from .models import Marker
from .runner import run_mypy

STDIN_MARKER: Final[str] = "-"
EXIT_CLEAN: Final[int] = 0
EXIT_MARKERS: Final[int] = 1
EXIT_FAILURE: Final[int] = 2

app = typer.Typer(
    name="typemarks",
    help="Turn mypy output into editor markers.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Turn mypy output into editor markers."""


def _read_output(output: Path) -> str:
    if str(output) == STDIN_MARKER:
        return typer.get_text_stream("stdin").read()
    if not output.is_file():
        raise typer.BadParameter(f"mypy output file not found: {output}", param_hint="--output")
    return output.read_text(encoding="utf-8")


def _render_table(markers: Sequence[Marker]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Message", overflow="fold")
    for marker in markers:
        table.add_row(
            str(marker.line),
            "" if marker.col is None else str(marker.col),
            marker.severity.value,
            marker.message,
        )
    get_console().print(table)


@app.command()
def check(
    source: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="Source file the markers belong to."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="File holding mypy output ('-' reads stdin)."),
    ] = None,
    run: Annotated[bool, typer.Option("--run", help="Invoke mypy on SOURCE instead of reading output.")] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="pyproject.toml holding a [tool.typemarks] table."),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit markers as JSON.")] = False,
    no_path_filter: Annotated[
        bool,
        typer.Option("--no-path-filter", help="Treat SOURCE as an unsaved buffer and accept every reported file."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline details to stderr.")] = False,
) -> None:
    """Print the markers mypy output produces for SOURCE.

    Exits with 0 when no markers remain, 1 when markers were produced and 2 on failure.
    """

    if (output is None) == (not run):
        raise typer.BadParameter("Provide exactly one of --output or --run.")
    if verbose:
        configure_verbose_logging()

    # mypy reports paths relative to the directory it ran in, which is ours.
    run_dir = Path.cwd().resolve()
    try:
        config: MarkerConfig = load_config(config_path)
        if output is not None:
            stdout, stderr = _read_output(output), ""
        else:
            result = run_mypy(source, config)
            stdout, stderr = result.stdout, result.stderr
        text = source.read_text(encoding="utf-8")
        document = TextDocument(text, path=None if no_path_filter else source.resolve())
        markers = MypyAnalysis(document, config, base_dir=run_dir).analyze(stdout, stderr)
    except TypemarksError as exc:
        fail(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except (OSError, UnicodeDecodeError) as exc:
        fail(f"cannot read input: {exc}")
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if as_json:
        typer.echo(json.dumps([marker.to_dict() for marker in markers], indent=2))
    elif markers:
        _render_table(markers)
        warn(f"{len(markers)} marker(s) for {source}")
    else:
        ok(f"No markers for {source}")
    raise typer.Exit(code=EXIT_MARKERS if markers else EXIT_CLEAN)


__all__ = ["app", "check"]
