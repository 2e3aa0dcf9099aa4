"""Alignment-tracking normalized string.

Responsibilities:
- Keep the untouched original text next to the current normalized text.
- Track, for every normalized character, the original byte range it descends from.
- Apply casing, canonical forms, trimming, filtering, mapping, replacement, and splitting
  without losing that provenance.

Key types:
- `NormalizedString`: the mutable text entity.

Alignments are `(start, end)` UTF-8 byte ranges into `original`. An empty range
marks inserted text; its position is the original offset it was inserted at.
Every mutation builds the new text and alignments first and assigns both at the
end, so a failing operation leaves the instance unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..errors import PatternError
from .callbacks import (
    CharObserver,
    CharPredicate,
    CharTransform,
    call_observer,
    call_predicate,
    call_transform,
    require_callable,
)
from .offsets import OffsetIndex
from .patterns import PatternLike, to_pattern
from .ranges import RangeSpec, resolve_range
from .splitting import SplitDelimiterBehavior, group_spans
from .unicode import Alignment, CanonicalForm, canonicalize, union

_SURROGATE_SAFE = "surrogatepass"


class NormalizedString:
    """A string that remembers where each of its characters came from.

    Args:
        sequence: The text used as both original and initial normalized value.
    """

    __slots__ = ("_original", "_original_bytes", "_normalized", "_alignments")

    def __init__(self, sequence: str) -> None:
        if not isinstance(sequence, str):
            raise TypeError(f"NormalizedString expects a str, got `{type(sequence).__name__}`.")
        self._original = sequence
        self._original_bytes = sequence.encode("utf-8", _SURROGATE_SAFE)
        self._normalized = sequence
        self._alignments: list[Alignment] = OffsetIndex(sequence).char_spans()

    @classmethod
    def _from_parts(
        cls,
        original: str,
        normalized: str,
        alignments: list[Alignment],
    ) -> NormalizedString:
        """Build an instance from already consistent parts."""

        instance = cls.__new__(cls)
        instance._original = original
        instance._original_bytes = original.encode("utf-8", _SURROGATE_SAFE)
        instance._normalized = normalized
        instance._alignments = alignments
        return instance

    @property
    def original(self) -> str:
        return self._original

    @property
    def normalized(self) -> str:
        return self._normalized

    @property
    def alignments(self) -> tuple[Alignment, ...]:
        return tuple(self._alignments)

    def _commit(self, normalized: str, alignments: list[Alignment]) -> None:
        """Replace normalized text and alignments together."""

        self._normalized = normalized
        self._alignments = alignments

    # Canonical forms

    def apply_canonical_form(self, form: CanonicalForm | str) -> None:
        """Apply a Unicode normalization form, tracking expansions and merges."""

        self._commit(*canonicalize(self._normalized, self._alignments, form))

    def nfd(self) -> None:
        self.apply_canonical_form(CanonicalForm.NFD)

    def nfkd(self) -> None:
        self.apply_canonical_form(CanonicalForm.NFKD)

    def nfc(self) -> None:
        self.apply_canonical_form(CanonicalForm.NFC)

    def nfkc(self) -> None:
        self.apply_canonical_form(CanonicalForm.NFKC)

    # Casing

    def lowercase(self) -> None:
        self._remap_case(str.lower)

    def uppercase(self) -> None:
        self._remap_case(str.upper)

    def _remap_case(self, convert: Callable[[str], str]) -> None:
        """Apply a case mapping; multi-character mappings inherit the source range."""

        converted = convert(self._normalized)
        if len(converted) == len(self._normalized):
            self._commit(converted, list(self._alignments))
            return

        chars: list[str] = []
        alignments: list[Alignment] = []
        for char, alignment in zip(self._normalized, self._alignments):
            mapped = convert(char)
            chars.append(mapped)
            alignments.extend([alignment] * len(mapped))
        self._commit("".join(chars), alignments)

    # Insertion

    def prepend(self, text: str) -> None:
        """Insert `text` before the first character with empty alignments."""

        if not text:
            return
        anchor = self._alignments[0][0] if self._alignments else 0
        self._commit(text + self._normalized, [(anchor, anchor)] * len(text) + self._alignments)

    def append(self, text: str) -> None:
        """Insert `text` after the last character with empty alignments."""

        if not text:
            return
        anchor = self._alignments[-1][1] if self._alignments else 0
        self._commit(self._normalized + text, self._alignments + [(anchor, anchor)] * len(text))

    # Trimming

    def lstrip(self) -> None:
        self._strip(left=True, right=False)

    def rstrip(self) -> None:
        self._strip(left=False, right=True)

    def strip(self) -> None:
        self._strip(left=True, right=True)

    def _strip(self, *, left: bool, right: bool) -> None:
        """Drop leading and/or trailing whitespace with its alignments.

        Whitespace is what `str.isspace` accepts, which includes the ASCII
        information separators U+001C to U+001F.
        """

        text = self._normalized
        start = len(text) - len(text.lstrip()) if left else 0
        end = len(text.rstrip()) if right else len(text)
        end = max(start, end)
        self._commit(text[start:end], self._alignments[start:end])

    def clear(self) -> None:
        """Empty the normalized text; the original stays available."""

        self._commit("", [])

    # Per-character callbacks

    def filter(self, func: CharPredicate) -> None:
        """Keep only characters for which `func` returns `True`."""

        require_callable(func, "filter")
        kept = [
            (char, alignment)
            for char, alignment in zip(self._normalized, self._alignments)
            if call_predicate(func, char)
        ]
        self._commit("".join(char for char, _ in kept), [alignment for _, alignment in kept])

    def map(self, func: CharTransform) -> None:
        """Replace each character with the single character returned by `func`."""

        require_callable(func, "map")
        mapped = "".join(call_transform(func, char) for char in self._normalized)
        self._commit(mapped, list(self._alignments))

    def for_each(self, func: CharObserver) -> None:
        """Call `func` with each character, in order, without mutating."""

        require_callable(func, "for_each")
        for char in self._normalized:
            call_observer(func, char)

    # Pattern operations

    def replace(self, pattern: PatternLike, content: str) -> None:
        """Replace every match of `pattern` with `content`.

        Each inserted character carries the union of the original ranges of the
        text it replaced.
        """

        spans = to_pattern(pattern).find_matches(self._normalized)
        index = OffsetIndex(self._normalized)
        pieces: list[str] = []
        alignments: list[Alignment] = []
        for span in spans:
            start, end = self._span_chars(index, span.start, span.end)
            if not span.is_match:
                pieces.append(self._normalized[start:end])
                alignments.extend(self._alignments[start:end])
                continue
            pieces.append(content)
            alignments.extend([union(self._alignments[start:end])] * len(content))
        self._commit("".join(pieces), alignments)

    def split(
        self,
        pattern: PatternLike,
        behavior: SplitDelimiterBehavior | str,
    ) -> list[NormalizedString]:
        """Split into independent normalized strings around `pattern` matches."""

        behavior = SplitDelimiterBehavior.parse(behavior)
        spans = to_pattern(pattern).find_matches(self._normalized)
        index = OffsetIndex(self._normalized)
        return [
            self._extract(*self._span_chars(index, start, end))
            for start, end in group_spans(spans, behavior)
        ]

    @staticmethod
    def _span_chars(index: OffsetIndex, start: int, end: int) -> tuple[int, int]:
        """Convert a pattern byte span to characters of the normalized text."""

        chars = index.bytes_to_chars(start, end)
        if chars is None:
            raise PatternError(
                operation="pattern",
                detail=f"Byte span ({start}, {end}) does not fall on character boundaries.",
            )
        return chars

    # Queries

    def slice(self, spec: RangeSpec) -> NormalizedString | None:
        """Return an independent copy of a character range, or `None` if unreachable."""

        start, end = resolve_range(spec, len(self._normalized))
        if OffsetIndex(self._normalized).char_to_bytes(start, end) is None:
            return None
        return self._extract(start, end)

    def original_span(self, start: int, end: int) -> Alignment | None:
        """Map a normalized character range to the original byte range it covers."""

        if start < 0 or end < start or end > len(self._normalized):
            return None
        if start == end:
            if start < len(self._alignments):
                anchor = self._alignments[start][0]
            elif self._alignments:
                anchor = self._alignments[-1][1]
            else:
                anchor = 0
            return anchor, anchor
        return union(self._alignments[start:end])

    def original_text(self, start: int, end: int) -> str | None:
        """Return the original text covered by a normalized character range."""

        span = self.original_span(start, end)
        if span is None:
            return None
        return self._original_bytes[span[0]:span[1]].decode("utf-8", _SURROGATE_SAFE)

    def _extract(self, start: int, end: int) -> NormalizedString:
        """Build an independent instance for normalized characters `[start, end)`."""

        alignments = self._alignments[start:end]
        if not alignments:
            return NormalizedString._from_parts("", "", [])
        offset, limit = union(alignments)
        original = self._original_bytes[offset:limit].decode("utf-8", _SURROGATE_SAFE)
        return NormalizedString._from_parts(
            original,
            self._normalized[start:end],
            _shift(alignments, offset),
        )

    def __getitem__(self, spec: RangeSpec) -> NormalizedString | None:
        return self.slice(spec)

    def __len__(self) -> int:
        return len(self._normalized)

    def __str__(self) -> str:
        return self._normalized

    def __repr__(self) -> str:
        return f'NormalizedString(original="{self._original}", normalized="{self._normalized}")'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NormalizedString):
            return NotImplemented
        return (
            self._original == other._original
            and self._normalized == other._normalized
            and self._alignments == other._alignments
        )

    __hash__ = None  # type: ignore[assignment]


def _shift(alignments: Iterable[Alignment], offset: int) -> list[Alignment]:
    """Rebase alignments so that `offset` becomes zero."""

    return [(start - offset, end - offset) for start, end in alignments]

