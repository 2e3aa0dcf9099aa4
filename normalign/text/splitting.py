"""Grouping of match spans into split segments.

Responsibilities:
- Define the five delimiter behaviors available to `split`.
- Merge match/content spans into ordered, non-empty output ranges.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from .patterns import MatchSpan


class SplitDelimiterBehavior(str, Enum):
    """How matched delimiters are grouped with neighbouring content."""

    REMOVED = "removed"
    ISOLATED = "isolated"
    MERGED_WITH_PREVIOUS = "merged_with_previous"
    MERGED_WITH_NEXT = "merged_with_next"
    CONTIGUOUS = "contiguous"

    @classmethod
    def parse(cls, value: SplitDelimiterBehavior | str) -> SplitDelimiterBehavior:
        """Return the behavior for an enum member or its textual value.

        Raises:
            ValueError: If the value is not one of the five behaviors.
        """

        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        for behavior in cls:
            if behavior.value == token:
                return behavior
        choices = ", ".join(behavior.value for behavior in cls)
        raise ValueError(
            f"Wrong value for SplitDelimiterBehavior {value!r}, expected one of: {choices}."
        )


def group_spans(
    spans: Sequence[MatchSpan],
    behavior: SplitDelimiterBehavior | str,
) -> list[tuple[int, int]]:
    """Group partition spans into output ranges according to `behavior`.

    Empty ranges are never returned and input order is preserved.
    """

    behavior = SplitDelimiterBehavior.parse(behavior)

    if behavior is SplitDelimiterBehavior.REMOVED:
        grouped = [[span.start, span.end] for span in spans if not span.is_match]
    elif behavior is SplitDelimiterBehavior.ISOLATED:
        grouped = [[span.start, span.end] for span in spans]
    elif behavior is SplitDelimiterBehavior.MERGED_WITH_PREVIOUS:
        grouped = _merge_into_neighbour(spans)
    elif behavior is SplitDelimiterBehavior.MERGED_WITH_NEXT:
        grouped = _merge_into_neighbour(spans[::-1])
        grouped.reverse()
    else:
        grouped = _coalesce_runs(spans)

    return [(start, end) for start, end in grouped if end > start]


def _merge_into_neighbour(spans: Sequence[MatchSpan]) -> list[list[int]]:
    """Attach each first match of a run to the segment emitted just before it.

    Spans arrive in traversal order; for `MERGED_WITH_NEXT` they are reversed,
    so the "previous" segment is the following one in text order.
    """

    grouped: list[list[int]] = []
    previous_match = False
    for span in spans:
        if span.is_match and not previous_match and grouped:
            segment = grouped[-1]
            segment[0] = min(segment[0], span.start)
            segment[1] = max(segment[1], span.end)
        else:
            grouped.append([span.start, span.end])
        previous_match = span.is_match
    return grouped


def _coalesce_runs(spans: Sequence[MatchSpan]) -> list[list[int]]:
    """Coalesce consecutive spans sharing the same match flag."""

    grouped: list[list[int]] = []
    previous_match: bool | None = None
    for span in spans:
        if grouped and span.is_match == previous_match:
            grouped[-1][1] = span.end
        else:
            grouped.append([span.start, span.end])
        previous_match = span.is_match
    return grouped
