"""Domain exceptions for normalization operations and CLI diagnostics."""

from __future__ import annotations


class NormalizationError(RuntimeError):
    """Base error raised when a normalization operation fails."""

    def __init__(
        self,
        *,
        operation: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize an operation-scoped normalization error."""

        super().__init__(detail)
        self.operation = operation
        self.detail = detail
        self.hint = hint


class RangeError(NormalizationError):
    """Raised when a range specification resolves outside the valid bound."""


class PatternError(NormalizationError):
    """Raised when a pattern cannot be compiled or evaluated."""


class CallbackError(NormalizationError):
    """Raised when a host callback is not callable or returns a wrong type."""


class ContractViolation(NormalizationError):
    """Raised when a `map` callback does not return exactly one character."""


class HandleExpired(NormalizationError):
    """Raised when a scoped handle is used after its scope has ended."""


class PipelineStepError(NormalizationError):
    """Raised when a configured pipeline step fails."""

    def __init__(
        self,
        *,
        step: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a step-scoped pipeline error."""

        super().__init__(operation=step, detail=detail, hint=hint)
        self.step = step
