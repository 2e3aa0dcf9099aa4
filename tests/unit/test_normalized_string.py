"""Unit tests for alignment-preserving `NormalizedString` operations."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from normalign.errors import CallbackError, ContractViolation, PatternError, RangeError
from normalign.text.normalized import NormalizedString
from normalign.text.patterns import Regex
from normalign.text.splitting import SplitDelimiterBehavior

_SAMPLES = ["", "hello", "  padded text \t", "Straße", "ʼn café", "😀 emoji ✓", "a,b,,c"]


def _state(normalized: NormalizedString) -> tuple[str, str, tuple[tuple[int, int], ...]]:
    """Capture observable state to assert that failed operations changed nothing."""

    return normalized.original, normalized.normalized, normalized.alignments


@pytest.mark.parametrize("text", _SAMPLES)
def test_construction_uses_identity_alignments(text: str) -> None:
    """A fresh instance should map every character to its own original byte range."""

    normalized = NormalizedString(text)

    assert normalized.original == text
    assert normalized.normalized == text
    assert len(normalized.alignments) == len(text)
    for position, (start, end) in enumerate(normalized.alignments):
        assert text.encode("utf-8")[start:end].decode("utf-8") == text[position]


def test_construction_rejects_non_string_input() -> None:
    """Only `str` sequences can be normalized."""

    with pytest.raises(TypeError):
        NormalizedString(b"bytes")  # type: ignore[arg-type]


@pytest.mark.parametrize("text", _SAMPLES)
def test_one_to_one_operations_keep_alignment_count(text: str) -> None:
    """Lowercase, uppercase, and map should keep one alignment per character."""

    normalized = NormalizedString(text)

    normalized.lowercase()
    assert len(normalized.alignments) == len(normalized.normalized)
    normalized.map(lambda char: "_" if char.isspace() else char)
    assert len(normalized.alignments) == len(normalized.normalized)
    normalized.uppercase()
    assert len(normalized.alignments) == len(normalized.normalized)


def test_lowercase_keeps_alignments_positionally() -> None:
    """Single-character case mappings should leave alignments untouched."""

    normalized = NormalizedString("HeLLo")
    before = normalized.alignments

    normalized.lowercase()

    assert normalized.normalized == "hello"
    assert normalized.alignments == before
    assert normalized.original == "HeLLo"


def test_uppercase_expansion_inherits_source_range() -> None:
    """Multi-character case mappings should copy the source character's range."""

    normalized = NormalizedString("straße")

    normalized.uppercase()

    assert normalized.normalized == "STRASSE"
    assert normalized.alignments == (
        (0, 1),
        (1, 2),
        (2, 3),
        (3, 4),
        (4, 6),
        (4, 6),
        (6, 7),
    )


def test_prepend_and_append_insert_empty_alignments() -> None:
    """Inserted text should carry empty ranges while existing entries only shift."""

    normalized = NormalizedString("abc")

    normalized.prepend("> ")
    normalized.append("!")

    assert normalized.normalized == "> abc!"
    assert normalized.alignments == ((0, 0), (0, 0), (0, 1), (1, 2), (2, 3), (3, 3))
    assert normalized.original == "abc"


def test_strip_variants_truncate_prefix_and_suffix() -> None:
    """Strip operations should remove only leading/trailing whitespace entries."""

    left = NormalizedString("  hi there  ")
    left.lstrip()
    right = NormalizedString("  hi there  ")
    right.rstrip()
    both = NormalizedString("  hi there  ")
    both.strip()

    assert left.normalized == "hi there  "
    assert right.normalized == "  hi there"
    assert both.normalized == "hi there"
    assert both.alignments[0] == (2, 3)
    assert both.alignments[-1] == (9, 10)


@pytest.mark.parametrize("text", _SAMPLES + ["   ", "\n x \n"])
def test_lstrip_then_rstrip_matches_strip(text: str) -> None:
    """Composing `lstrip` and `rstrip` should equal a single `strip`."""

    composed = NormalizedString(text)
    composed.lstrip()
    composed.rstrip()
    single = NormalizedString(text)
    single.strip()

    assert composed == single


def test_clear_keeps_original_available() -> None:
    """Clearing should empty normalized text and alignments but keep the original."""

    normalized = NormalizedString("keep me")

    normalized.clear()

    assert normalized.normalized == ""
    assert normalized.alignments == ()
    assert normalized.original == "keep me"


def test_filter_drops_characters_and_their_alignments() -> None:
    """Filtered characters should disappear together with their ranges."""

    normalized = NormalizedString("a1b2")

    normalized.filter(str.isalpha)

    assert normalized.normalized == "ab"
    assert normalized.alignments == ((0, 1), (2, 3))


def test_filter_requires_boolean_results_and_leaves_state_unchanged() -> None:
    """Non-boolean predicate results should raise `CallbackError` without mutation."""

    normalized = NormalizedString("abc")
    before = _state(normalized)

    with pytest.raises(CallbackError):
        normalized.filter(lambda char: "yes")  # type: ignore[arg-type, return-value]
    with pytest.raises(CallbackError):
        normalized.filter("not callable")  # type: ignore[arg-type]

    assert _state(normalized) == before


def test_map_replaces_characters_one_to_one() -> None:
    """Map should swap characters while keeping alignments."""

    normalized = NormalizedString("abc")

    normalized.map(lambda char: char.upper())

    assert normalized.normalized == "ABC"
    assert normalized.alignments == ((0, 1), (1, 2), (2, 3))


@pytest.mark.parametrize(
    ("transform", "error_type"),
    [
        (lambda char: "", ContractViolation),
        (lambda char: char * 2, ContractViolation),
        (lambda char: 5, CallbackError),
        (lambda char: 1 / 0, CallbackError),
    ],
)
def test_map_rejects_invalid_results_without_partial_mutation(
    transform: object, error_type: type[Exception]
) -> None:
    """Bad map results should raise and leave the instance untouched."""

    normalized = NormalizedString("abc")
    before = _state(normalized)

    with pytest.raises(error_type):
        normalized.map(transform)  # type: ignore[arg-type]

    assert _state(normalized) == before


def test_for_each_visits_characters_in_order_without_mutation() -> None:
    """`for_each` should be a read-only traversal."""

    normalized = NormalizedString("héllo")
    seen: list[str] = []

    normalized.for_each(seen.append)

    assert seen == list("héllo")
    assert normalized.normalized == "héllo"


def test_for_each_wraps_observer_failures() -> None:
    """Observer exceptions should surface as `CallbackError` with the cause attached."""

    def _explode(char: str) -> None:
        raise KeyError(char)

    with pytest.raises(CallbackError) as exc_info:
        NormalizedString("x").for_each(_explode)

    assert isinstance(exc_info.value.__cause__, KeyError)


def test_replace_attributes_inserted_text_to_matched_span() -> None:
    """Every replacement character should carry the union range of its match."""

    normalized = NormalizedString("foo")

    normalized.replace("o", "00")

    assert normalized.normalized == "f0000"
    assert normalized.alignments == ((0, 1), (1, 2), (1, 2), (2, 3), (2, 3))


def test_replace_with_regex_collapses_runs() -> None:
    """Regex replacement should merge ranges of multi-character matches."""

    normalized = NormalizedString("a  b   c")

    normalized.replace(Regex(r"\s+"), " ")

    assert normalized.normalized == "a b c"
    assert normalized.alignments == ((0, 1), (1, 3), (3, 4), (4, 7), (7, 8))


def test_replace_with_empty_content_removes_matches() -> None:
    """Empty replacement content should delete matched characters."""

    normalized = NormalizedString("a-b-c")

    normalized.replace("-", "")

    assert normalized.normalized == "abc"
    assert normalized.alignments == ((0, 1), (2, 3), (4, 5))


def test_replace_fails_on_unsupported_pattern() -> None:
    """Pattern errors should propagate and keep the instance unchanged."""

    normalized = NormalizedString("abc")
    before = _state(normalized)

    with pytest.raises(PatternError):
        normalized.replace(3.14, "x")  # type: ignore[arg-type]

    assert _state(normalized) == before


def test_split_removed_drops_empty_segments() -> None:
    """Removed behavior should drop delimiters and empty groups."""

    segments = NormalizedString("a,b,,c").split(",", SplitDelimiterBehavior.REMOVED)

    assert [segment.normalized for segment in segments] == ["a", "b", "c"]
    assert [segment.original for segment in segments] == ["a", "b", "c"]
    assert all(segment.alignments == ((0, 1),) for segment in segments)


def test_split_merged_with_next_prefixes_delimiters() -> None:
    """MergedWithNext should attach each delimiter to the following content."""

    segments = NormalizedString("a,b,c").split(",", "merged_with_next")

    assert [segment.normalized for segment in segments] == ["a", ",b", ",c"]


def test_split_merged_with_previous_suffixes_delimiters() -> None:
    """MergedWithPrevious should attach each delimiter to the preceding content."""

    segments = NormalizedString("a,b,c").split(",", "merged_with_previous")

    assert [segment.normalized for segment in segments] == ["a,", "b,", "c"]


def test_split_whole_match_with_removed_returns_no_segments() -> None:
    """A delimiter covering the whole string should produce an empty result."""

    assert NormalizedString("--").split("--", "removed") == []


@pytest.mark.parametrize("behavior", ["isolated", "contiguous"])
@pytest.mark.parametrize("text", ["a,b,,c", ",,x,", "no commas", "é,ü,,😀"])
def test_split_is_lossless_for_isolated_and_contiguous(text: str, behavior: str) -> None:
    """Concatenated segments should reproduce the text for lossless behaviors."""

    segments = NormalizedString(text).split(",", behavior)

    assert "".join(segment.normalized for segment in segments) == text


def test_split_segments_restart_alignments_at_zero() -> None:
    """Segments should own their original sub-text with zero-based alignments."""

    parent = NormalizedString("Hello W\u00f6rld")
    parent.lowercase()

    segments = parent.split(Regex(r"\s"), SplitDelimiterBehavior.REMOVED)

    assert [segment.normalized for segment in segments] == ["hello", "w\u00f6rld"]
    assert segments[1].original == "W\u00f6rld"
    assert segments[1].alignments == ((0, 1), (1, 3), (3, 4), (4, 5), (5, 6))
    assert parent.normalized == "hello w\u00f6rld"


def test_split_segments_are_independent_of_parent() -> None:
    """Mutating a segment must not affect the source instance."""

    parent = NormalizedString("ab cd")
    first, _ = parent.split(" ", "removed")

    first.uppercase()

    assert first.normalized == "AB"
    assert parent.normalized == "ab cd"


def test_slice_single_negative_index() -> None:
    """`slice(-1)` on `hello` should return the last character."""

    piece = NormalizedString("hello").slice(-1)

    assert piece is not None
    assert piece.normalized == "o"
    assert piece.original == "o"
    assert piece.alignments == ((0, 1),)


def test_slice_supports_pairs_and_slices_via_getitem() -> None:
    """Slicing should accept tuples and Python slices through `[]`."""

    normalized = NormalizedString("hello")

    assert normalized.slice((1, 3)).normalized == "el"  # type: ignore[union-attr]
    assert normalized[1:].normalized == "ello"  # type: ignore[union-attr]
    assert normalized[:2].normalized == "he"  # type: ignore[union-attr]


def test_slice_out_of_range_returns_none() -> None:
    """Structurally valid but unreachable ranges should return `None`."""

    normalized = NormalizedString("  hi  ")
    normalized.strip()

    assert normalized.slice(2) is None
    assert normalized.slice((1, 9)) is None
    assert normalized[0].original == "h"  # type: ignore[union-attr]


def test_slice_rejects_invalid_specifications() -> None:
    """Invalid range specifications should raise `RangeError`."""

    normalized = NormalizedString("hello")

    with pytest.raises(RangeError):
        normalized.slice(-6)
    with pytest.raises(RangeError):
        normalized[::2]


def test_slice_of_inserted_text_has_empty_original() -> None:
    """Slicing inserted characters should yield an empty original."""

    normalized = NormalizedString("abc")
    normalized.prepend(">")

    piece = normalized[0]

    assert piece is not None
    assert piece.normalized == ">"
    assert piece.original == ""
    assert piece.alignments == ((0, 0),)


def test_original_span_maps_back_to_source_text() -> None:
    """Normalized ranges should map back to the original bytes they descend from."""

    normalized = NormalizedString("  H\u00e9llo  ")
    normalized.strip()
    normalized.lowercase()

    assert normalized.original_span(0, 2) == (2, 5)
    assert normalized.original_text(0, 5) == "H\u00e9llo"
    assert normalized.original_span(2, 2) == (5, 5)
    assert normalized.original_span(3, 9) is None


def test_dunder_methods_expose_normalized_text() -> None:
    """`str`, `repr`, `len`, and equality should reflect the instance state."""

    normalized = NormalizedString("Abc")
    normalized.lowercase()

    assert str(normalized) == "abc"
    assert repr(normalized) == 'NormalizedString(original="Abc", normalized="abc")'
    assert len(normalized) == 3
    assert normalized != NormalizedString("abc")
    assert NormalizedString("x") == NormalizedString("x")


def test_strip_uses_python_whitespace_set() -> None:
    """Information separators and Unicode spaces are trimmed; zero-width space is kept."""

    normalized = NormalizedString("\x1c\u00a0 a b\u3000\x1f")
    normalized.strip()

    assert normalized.normalized == "a b"
    assert normalized.alignments[0] == (4, 5)

    zero_width = NormalizedString("\u200bx\u200b")
    zero_width.strip()

    assert zero_width.normalized == "\u200bx\u200b"


def _nfkd_then_filter_marks(normalized: NormalizedString) -> None:
    normalized.nfkd()
    normalized.filter(lambda char: char not in "\u0300\u0301\u0302\u0308")


_MUTATIONS = [
    pytest.param("a bb c", lambda ns: ns.replace(" ", "__"), id="replace-longer"),
    pytest.param("a  b  c", lambda ns: ns.replace(Regex(r"\s+"), ""), id="replace-remove"),
    pytest.param("x-y", lambda ns: ns.replace("-", "\u00e9\u00e9\u00e9"), id="replace-multibyte"),
    pytest.param("abc", lambda ns: ns.prepend("> "), id="prepend"),
    pytest.param("abc", lambda ns: ns.append(" <"), id="append"),
    pytest.param("", lambda ns: ns.append("!"), id="append-empty"),
    pytest.param("h\u00e9llo w\u00f6rld", lambda ns: ns.filter(lambda c: c not in "lo"), id="filter"),
    pytest.param("stra\u00dfe", lambda ns: ns.uppercase(), id="uppercase-expansion"),
    pytest.param("\u039f\u0394\u039f\u03a3", lambda ns: ns.lowercase(), id="lowercase-final-sigma"),
    pytest.param("a\u0302\u0323 e\u0301", lambda ns: ns.nfd(), id="nfd-reordered-marks"),
    pytest.param("\u0149 \ufb01 \u00bd", lambda ns: ns.nfkd(), id="nfkd-expansion"),
    pytest.param("e\u0301a\u0302\u0323", lambda ns: ns.nfc(), id="nfc-composition"),
    pytest.param("  mid  ", lambda ns: ns.strip(), id="strip"),
    pytest.param("abc", lambda ns: ns.map(str.upper), id="map"),
    pytest.param("abc", lambda ns: ns.clear(), id="clear"),
    pytest.param("Cr\u00e8me br\u00fbl\u00e9e", _nfkd_then_filter_marks, id="nfkd-filter"),
]


@pytest.mark.parametrize(("text", "mutate"), _MUTATIONS)
def test_mutations_keep_alignments_parallel_and_ordered(
    text: str, mutate: Callable[[NormalizedString], None]
) -> None:
    """Every mutation keeps one alignment per character with non-decreasing starts."""

    normalized = NormalizedString(text)

    mutate(normalized)

    assert len(normalized.alignments) == len(normalized.normalized)
    starts = [start for start, _ in normalized.alignments]
    assert starts == sorted(starts)
    assert all(start <= end for start, end in normalized.alignments)
    assert all(end <= len(text.encode("utf-8")) for _, end in normalized.alignments)
