"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
alignment tables, and split segments.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

import typer

from .errors import NormalizationError
from .text.normalized import NormalizedString


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, NormalizationError):
        typer.secho(
            f"{command_name} failed at `{exc.operation}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_alignments(normalized: NormalizedString) -> None:
    """Print one tab-separated row per normalized character with its original span."""

    for position, (char, (start, end)) in enumerate(
        zip(normalized.normalized, normalized.alignments)
    ):
        source = normalized.original_text(position, position + 1) or ""
        typer.echo(f"{char!r}\t{start}\t{end}\t{source!r}")


def echo_segments(segments: Sequence[NormalizedString]) -> None:
    """Print split segments with the original text each one descends from."""

    for segment in segments:
        typer.echo(f"{segment.normalized!r}\t{segment.original!r}")
    typer.echo(f"Segments: {len(segments)}")
