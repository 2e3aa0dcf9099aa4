"""Command-line interface for normalign.

Responsibilities:
- Expose user-facing commands for normalizing and splitting text.
- Convert CLI arguments into `NormalizerConfig` and run the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_alignments, echo_segments, exit_with_command_error
from .config import ConfigLoader, NormalizerConfig
from .errors import NormalizationError
from .pipeline import NormalizationPipeline
from .telemetry.logger import RunLogger
from .text.normalized import NormalizedString
from .text.patterns import Regex
from .text.splitting import SplitDelimiterBehavior
from .text.steps import StepSpec

app = typer.Typer(
    name="normalign",
    no_args_is_help=True,
    help="Alignment-preserving text normalization CLI.",
)


def _resolve_config(config_file: Path | None, steps: list[str] | None) -> NormalizerConfig:
    """Load YAML defaults when requested and apply `--step` overrides."""

    if config_file is None:
        config = NormalizerConfig()
    else:
        try:
            config = ConfigLoader.from_yaml(config_file)
        except FileNotFoundError as exc:
            raise NormalizationError(
                operation="config",
                detail=f"Config file not found: `{config_file}`.",
                hint="Provide an existing path via `--config <path.yaml>`.",
            ) from exc
        except ValueError as exc:
            raise NormalizationError(
                operation="config",
                detail=f"Invalid config file `{config_file}`: {exc}",
                hint="Fix config schema/values and rerun.",
            ) from exc

    if steps:
        config = replace(config, steps=tuple(StepSpec(name=name) for name in steps))
        try:
            config.validate()
        except ValueError as exc:
            raise NormalizationError(
                operation="config",
                detail=str(exc),
                hint="Use `--step` with names such as `nfkd`, `lowercase`, or `strip`.",
            ) from exc
    return config


def _build_pipeline(config: NormalizerConfig, verbose: bool) -> NormalizationPipeline:
    """Create the pipeline, attaching a run logger in verbose mode."""

    run_logger = RunLogger() if verbose or config.verbose else None
    return NormalizationPipeline.from_config(config, run_logger=run_logger)


@app.command("normalize")
def normalize_command(
    text: Annotated[str, typer.Argument(help="Text to normalize.")],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with pipeline steps."),
    ] = None,
    step: Annotated[
        list[str] | None,
        typer.Option("--step", help="Step name; repeat to build a pipeline (overrides config)."),
    ] = None,
    alignments: Annotated[
        bool,
        typer.Option("--alignments/--no-alignments", help="Print per-character alignments."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log step events to stderr."),
    ] = False,
) -> None:
    """Normalize text and print the result."""

    try:
        config = _resolve_config(config_file, step)
        result = _build_pipeline(config, verbose).normalize_str(text)
    except Exception as exc:
        exit_with_command_error("normalize", exc)

    typer.echo(result.normalized)
    if alignments:
        echo_alignments(result)


@app.command("split")
def split_command(
    text: Annotated[str, typer.Argument(help="Text to normalize and split.")],
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", help="Delimiter pattern (overrides config)."),
    ] = None,
    behavior: Annotated[
        str | None,
        typer.Option(
            "--behavior",
            help=(
                "Delimiter behavior: `removed`, `isolated`, `merged_with_previous`, "
                "`merged_with_next`, or `contiguous`."
            ),
        ),
    ] = None,
    regex: Annotated[
        bool,
        typer.Option("--regex", help="Treat `--pattern` as a regular expression."),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with pipeline steps."),
    ] = None,
    step: Annotated[
        list[str] | None,
        typer.Option("--step", help="Step name; repeat to build a pipeline (overrides config)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log step events to stderr."),
    ] = False,
) -> None:
    """Normalize text, split it, and print each segment."""

    try:
        config = _resolve_config(config_file, step)
        if pattern is not None:
            split_pattern = Regex(pattern) if regex else pattern
        else:
            split_pattern = config.split_pattern_object()
        if split_pattern is None:
            raise NormalizationError(
                operation="config",
                detail="A split pattern is required.",
                hint="Pass `--pattern <delimiter>` or set `split_pattern` in the config file.",
            )
        resolved_behavior = (
            SplitDelimiterBehavior.parse(behavior) if behavior is not None else config.split_behavior
        )
        pipeline = _build_pipeline(config, verbose)
        segments = pipeline.split(NormalizedString(text), split_pattern, resolved_behavior)
    except Exception as exc:
        exit_with_command_error("split", exc)

    echo_segments(segments)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
