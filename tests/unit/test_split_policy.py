"""Unit tests for split delimiter behaviors and span grouping."""

from __future__ import annotations

import pytest

from normalign.text.patterns import MatchSpan
from normalign.text.splitting import SplitDelimiterBehavior, group_spans

# "a,,b" partitioned around commas.
_DOUBLE_COMMA = [
    MatchSpan(0, 1, False),
    MatchSpan(1, 2, True),
    MatchSpan(2, 3, True),
    MatchSpan(3, 4, False),
]


@pytest.mark.parametrize(
    ("behavior", "expected"),
    [
        (SplitDelimiterBehavior.REMOVED, [(0, 1), (3, 4)]),
        (SplitDelimiterBehavior.ISOLATED, [(0, 1), (1, 2), (2, 3), (3, 4)]),
        (SplitDelimiterBehavior.MERGED_WITH_PREVIOUS, [(0, 2), (2, 3), (3, 4)]),
        (SplitDelimiterBehavior.MERGED_WITH_NEXT, [(0, 1), (1, 2), (2, 4)]),
        (SplitDelimiterBehavior.CONTIGUOUS, [(0, 1), (1, 3), (3, 4)]),
    ],
)
def test_group_spans_applies_each_behavior(
    behavior: SplitDelimiterBehavior, expected: list[tuple[int, int]]
) -> None:
    """Each behavior should group adjacent delimiters as documented."""

    assert group_spans(_DOUBLE_COMMA, behavior) == expected


def test_leading_and_trailing_matches_are_emitted_alone() -> None:
    """A match with no neighbour to merge into should become its own segment."""

    leading = [MatchSpan(0, 1, True), MatchSpan(1, 2, False)]
    trailing = [MatchSpan(0, 1, False), MatchSpan(1, 2, True)]

    assert group_spans(leading, SplitDelimiterBehavior.MERGED_WITH_PREVIOUS) == [(0, 1), (1, 2)]
    assert group_spans(trailing, SplitDelimiterBehavior.MERGED_WITH_NEXT) == [(0, 1), (1, 2)]


def test_removed_behavior_on_full_match_yields_nothing() -> None:
    """Removing a delimiter that covers the whole text should leave no segments."""

    assert group_spans([MatchSpan(0, 3, True)], SplitDelimiterBehavior.REMOVED) == []


def test_zero_length_spans_are_never_emitted() -> None:
    """Empty spans should be dropped from every behavior's output."""

    spans = [MatchSpan(0, 0, False), MatchSpan(0, 2, False)]

    for behavior in SplitDelimiterBehavior:
        assert (0, 0) not in group_spans(spans, behavior)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("removed", SplitDelimiterBehavior.REMOVED),
        (" Isolated ", SplitDelimiterBehavior.ISOLATED),
        ("merged_with_previous", SplitDelimiterBehavior.MERGED_WITH_PREVIOUS),
        ("MERGED_WITH_NEXT", SplitDelimiterBehavior.MERGED_WITH_NEXT),
        (SplitDelimiterBehavior.CONTIGUOUS, SplitDelimiterBehavior.CONTIGUOUS),
    ],
)
def test_behavior_parse_accepts_textual_values(
    token: object, expected: SplitDelimiterBehavior
) -> None:
    """Behavior parsing should accept enum members and case-insensitive names."""

    assert SplitDelimiterBehavior.parse(token) is expected


def test_behavior_parse_rejects_unknown_values() -> None:
    """Unknown behaviors should raise `ValueError` listing valid choices."""

    with pytest.raises(ValueError, match="removed, isolated, merged_with_previous"):
        SplitDelimiterBehavior.parse("bogus")
