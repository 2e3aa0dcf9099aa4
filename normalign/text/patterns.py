"""Delimiter and target matching over text.

Responsibilities:
- Define the `Pattern` capability used by `split` and `replace`.
- Provide single-character, literal, and regular-expression variants.
- Always return a total partition of the searched text.

Key types:
- `MatchSpan`: one half-open byte range tagged as match or kept content.
- `CharPattern`, `StringPattern`, `Regex`: concrete pattern variants.
- `to_pattern`: select a variant from user input.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import re
from typing import Protocol, runtime_checkable

from ..errors import PatternError
from .offsets import OffsetIndex


@dataclass(frozen=True, slots=True)
class MatchSpan:
    """A byte range of the searched text.

    Attributes:
        start: Inclusive UTF-8 byte offset.
        end: Exclusive UTF-8 byte offset.
        is_match: `True` for delimiter/target spans, `False` for kept content.
    """

    start: int
    end: int
    is_match: bool


@runtime_checkable
class Pattern(Protocol):
    """Protocol for objects locating spans inside a haystack."""

    def find_matches(self, haystack: str) -> list[MatchSpan]:
        """Return spans partitioning `haystack` with no gaps, left to right."""


def partition(haystack: str, matches: Iterable[tuple[int, int]]) -> list[MatchSpan]:
    """Turn ordered, non-overlapping character match ranges into a byte partition."""

    index = OffsetIndex(haystack)
    spans: list[MatchSpan] = []
    cursor = 0
    for start, end in matches:
        if start > cursor:
            spans.append(MatchSpan(index.byte_offset(cursor), index.byte_offset(start), False))
        spans.append(MatchSpan(index.byte_offset(start), index.byte_offset(end), True))
        cursor = end
    if cursor < len(haystack):
        spans.append(MatchSpan(index.byte_offset(cursor), index.byte_length, False))
    return spans


class CharPattern:
    """Match every occurrence of one exact character."""

    __slots__ = ("char",)

    def __init__(self, char: str) -> None:
        if len(char) != 1:
            raise PatternError(
                operation="pattern",
                detail=f"CharPattern expects exactly one character, got {char!r}.",
            )
        self.char = char

    def find_matches(self, haystack: str) -> list[MatchSpan]:
        return partition(
            haystack,
            ((position, position + 1) for position, char in enumerate(haystack) if char == self.char),
        )

    def __repr__(self) -> str:
        return f"CharPattern({self.char!r})"


class StringPattern:
    """Match every non-overlapping occurrence of a literal substring."""

    __slots__ = ("literal",)

    def __init__(self, literal: str) -> None:
        self.literal = literal

    def find_matches(self, haystack: str) -> list[MatchSpan]:
        return partition(haystack, self._occurrences(haystack))

    def _occurrences(self, haystack: str) -> Iterator[tuple[int, int]]:
        """Yield greedy left-to-right occurrences of the literal."""

        if not self.literal:
            return
        width = len(self.literal)
        position = haystack.find(self.literal)
        while position != -1:
            yield position, position + width
            position = haystack.find(self.literal, position + width)

    def __repr__(self) -> str:
        return f"StringPattern({self.literal!r})"


class Regex:
    """A compiled regular expression usable as a pattern.

    Zero-width matches are ignored, so spans always cover at least one character.
    """

    __slots__ = ("pattern", "_compiled")

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        if isinstance(pattern, re.Pattern):
            compiled = pattern
        else:
            try:
                compiled = re.compile(pattern)
            except (re.error, TypeError) as exc:
                raise PatternError(
                    operation="pattern",
                    detail=f"Invalid regular expression {pattern!r}: {exc}",
                    hint="Escape literal delimiters or pass a plain string pattern.",
                ) from exc
        if not isinstance(compiled.pattern, str):
            raise PatternError(
                operation="pattern",
                detail=f"Regular expression {compiled.pattern!r} must be a text pattern, not bytes.",
                hint="Compile the expression from a `str`.",
            )
        self.pattern = compiled.pattern
        self._compiled = compiled

    def find_matches(self, haystack: str) -> list[MatchSpan]:
        try:
            matches = [match.span() for match in self._compiled.finditer(haystack) if match.end() > match.start()]
        except (re.error, RecursionError, TypeError) as exc:
            raise PatternError(
                operation="pattern",
                detail=f"Failed to evaluate regular expression {self.pattern!r}: {exc}",
            ) from exc
        return partition(haystack, matches)

    def __repr__(self) -> str:
        return f"Regex({self.pattern!r})"


PatternLike = str | Regex | re.Pattern[str] | Pattern


def to_pattern(value: PatternLike) -> Pattern:
    """Select the pattern variant for a user-supplied value.

    A one-character string uses `CharPattern`, any other string uses
    `StringPattern`. Both produce equivalent partitions.
    """

    if isinstance(value, str):
        if len(value) == 1:
            return CharPattern(value)
        return StringPattern(value)
    if isinstance(value, re.Pattern):
        return Regex(value)
    if isinstance(value, Pattern):
        return value
    raise PatternError(
        operation="pattern",
        detail=f"Unsupported pattern type `{type(value).__name__}`.",
        hint="Use a `str`, a `Regex`, or a compiled `re.Pattern`.",
    )
