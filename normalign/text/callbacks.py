"""Boundary for host callbacks used by `filter`, `map`, and `for_each`.

Every callback receives exactly one character. Return values are validated
here so that type mismatches surface as `CallbackError` or
`ContractViolation` rather than leaking into alignment bookkeeping.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..errors import CallbackError, ContractViolation

CharPredicate = Callable[[str], bool]
CharTransform = Callable[[str], str]
CharObserver = Callable[[str], Any]

_SIGNATURES = {
    "filter": "fn(char) -> bool",
    "map": "fn(char) -> char",
    "for_each": "fn(char)",
}


def require_callable(func: object, operation: str) -> None:
    """Raise `CallbackError` when `func` cannot be invoked."""

    if not callable(func):
        raise CallbackError(
            operation=operation,
            detail=f"`{operation}` expects a callable with the signature: `{_SIGNATURES[operation]}`.",
            hint=f"Got `{type(func).__name__}` instead.",
        )


def _invoke(func: Callable[[str], Any], char: str, operation: str) -> Any:
    """Call `func` with one character and wrap host exceptions."""

    try:
        return func(char)
    except Exception as exc:
        raise CallbackError(
            operation=operation,
            detail=f"`{operation}` callback failed on {char!r}: {exc}",
        ) from exc


def call_predicate(func: CharPredicate, char: str) -> bool:
    """Run a filter predicate and require a boolean result."""

    result = _invoke(func, char, "filter")
    if not isinstance(result, bool):
        raise CallbackError(
            operation="filter",
            detail=f"`filter` callback must return a bool, got `{type(result).__name__}`.",
        )
    return result


def call_transform(func: CharTransform, char: str) -> str:
    """Run a map transform and require exactly one character back."""

    result = _invoke(func, char, "map")
    if not isinstance(result, str):
        raise CallbackError(
            operation="map",
            detail=f"`map` callback must return a str, got `{type(result).__name__}`.",
        )
    if len(result) != 1:
        raise ContractViolation(
            operation="map",
            detail=f"`map` callback must return exactly one character, got {result!r}.",
            hint="Use `replace` to insert or remove text.",
        )
    return result


def call_observer(func: CharObserver, char: str) -> None:
    """Run a for_each observer, discarding its result."""

    _invoke(func, char, "for_each")
