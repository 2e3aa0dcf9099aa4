"""Normalization pipeline orchestration.

Responsibilities:
- Apply an ordered sequence of normalization steps to a `NormalizedString`.
- Emit step start/complete/failure events.
- Convert step failures into `PipelineStepError` diagnostics.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import NormalizerConfig
from .errors import NormalizationError, PipelineStepError
from .telemetry.logger import RunLogger
from .text.normalized import NormalizedString
from .text.patterns import PatternLike
from .text.splitting import SplitDelimiterBehavior
from .text.steps import NormalizationStep


class NormalizationPipeline:
    """Run configured normalization steps in order."""

    def __init__(
        self,
        steps: Sequence[NormalizationStep] | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize the pipeline with steps and an optional run logger."""

        self.steps = list(steps or [])
        self._run_logger = run_logger

    @classmethod
    def from_config(
        cls,
        config: NormalizerConfig,
        run_logger: RunLogger | None = None,
    ) -> NormalizationPipeline:
        """Build a pipeline from a validated configuration."""

        return cls(steps=config.build_steps(), run_logger=run_logger)

    def normalize(self, normalized: NormalizedString) -> NormalizedString:
        """Apply every step to `normalized` in place and return it."""

        for step in self.steps:
            self._run_step(step, normalized)
        return normalized

    def normalize_str(self, text: str) -> NormalizedString:
        """Create a `NormalizedString` from `text` and normalize it."""

        return self.normalize(NormalizedString(text))

    def split(
        self,
        normalized: NormalizedString,
        pattern: PatternLike,
        behavior: SplitDelimiterBehavior | str = SplitDelimiterBehavior.REMOVED,
    ) -> list[NormalizedString]:
        """Normalize `normalized` in place, then split it into segments."""

        self.normalize(normalized)
        try:
            return normalized.split(pattern, behavior)
        except NormalizationError as exc:
            self._log_failure("split", exc)
            raise PipelineStepError(step="split", detail=exc.detail, hint=exc.hint) from exc

    def _run_step(self, step: NormalizationStep, normalized: NormalizedString) -> None:
        """Apply one step with telemetry and error mapping."""

        if self._run_logger is not None:
            self._run_logger.log_step_start(step.name)
        try:
            step.apply(normalized)
        except NormalizationError as exc:
            self._log_failure(step.name, exc)
            raise PipelineStepError(
                step=step.name,
                detail=f"Step `{step.name}` failed: {exc.detail}",
                hint=exc.hint,
            ) from exc
        except Exception as exc:
            self._log_failure(step.name, exc)
            raise PipelineStepError(
                step=step.name,
                detail=f"Step `{step.name}` failed: {exc}",
            ) from exc
        if self._run_logger is not None:
            self._run_logger.log_step_complete(step.name, chars=len(normalized))

    def _log_failure(self, step_name: str, exc: Exception) -> None:
        """Emit a failure event when a run logger is configured."""

        if self._run_logger is not None:
            self._run_logger.log_step_failure(step_name, type(exc).__name__)
