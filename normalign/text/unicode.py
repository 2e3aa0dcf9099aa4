"""Unicode canonical forms with alignment tracking.

Responsibilities:
- Wrap the canonical-form capability (`unicodedata.normalize`).
- Recompute per-character alignments when a form expands or merges characters.

Decomposed characters inherit the range of the character they came from.
Composed characters receive the union of the ranges they merged. Text is
processed in independent clusters; a cluster whose attribution cannot be
reproduced exactly falls back to giving every output character the cluster
union.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
import unicodedata

from loguru import logger

Alignment = tuple[int, int]


class CanonicalForm(str, Enum):
    """Unicode normalization forms."""

    NFC = "NFC"
    NFD = "NFD"
    NFKC = "NFKC"
    NFKD = "NFKD"

    @classmethod
    def _missing_(cls, value: object) -> CanonicalForm | None:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().upper():
                    return member
        return None

    @property
    def composes(self) -> bool:
        return self in (CanonicalForm.NFC, CanonicalForm.NFKC)

    @property
    def decomposition(self) -> CanonicalForm:
        """Return the decomposing form used before composition."""

        if self is CanonicalForm.NFC:
            return CanonicalForm.NFD
        if self is CanonicalForm.NFKC:
            return CanonicalForm.NFKD
        return self


def apply_canonical_form(text: str, form: CanonicalForm | str) -> str:
    """Return `text` converted to the given Unicode normalization form."""

    return unicodedata.normalize(CanonicalForm(form).value, text)


def union(alignments: Sequence[Alignment]) -> Alignment:
    """Return the smallest range covering every alignment in the sequence."""

    return min(start for start, _ in alignments), max(end for _, end in alignments)


def canonicalize(
    text: str,
    alignments: Sequence[Alignment],
    form: CanonicalForm | str,
) -> tuple[str, list[Alignment]]:
    """Apply a canonical form to `text` and return the new text with alignments."""

    form = CanonicalForm(form)
    if unicodedata.is_normalized(form.value, text):
        return text, list(alignments)

    pieces: list[str] = []
    new_alignments: list[Alignment] = []
    for start, end in _clusters(text, form):
        chunk = text[start:end]
        converted = apply_canonical_form(chunk, form)
        pieces.append(converted)
        new_alignments.extend(_attribute(chunk, alignments[start:end], converted, form))

    normalized = "".join(pieces)
    expected = apply_canonical_form(text, form)
    if normalized != expected:
        logger.debug("canonical clusters diverged for form={}, using whole-text union", form.value)
        return expected, [union(alignments)] * len(expected)
    return normalized, new_alignments


def _clusters(text: str, form: CanonicalForm) -> list[tuple[int, int]]:
    """Split `text` into ranges that normalize independently of each other."""

    clusters: list[tuple[int, int]] = []
    start = 0
    for position in range(1, len(text)):
        char = text[position]
        if unicodedata.combining(char):
            continue
        current = text[start:position]
        joined = apply_canonical_form(current + char, form)
        if joined == apply_canonical_form(current, form) + apply_canonical_form(char, form):
            clusters.append((start, position))
            start = position
    if text:
        clusters.append((start, len(text)))
    return clusters


def _attribute(
    chunk: str,
    alignments: Sequence[Alignment],
    converted: str,
    form: CanonicalForm,
) -> list[Alignment]:
    """Attribute each character of `converted` to ranges of the chunk it came from."""

    pairs = _decompose(chunk, alignments, form.decomposition)
    if form.composes:
        pairs = _compose(pairs, form)

    if "".join(char for char, _ in pairs) == converted:
        return [alignment for _, alignment in pairs]
    logger.debug("falling back to cluster union for {!r} under {}", chunk, form.value)
    return [union(alignments)] * len(converted)


def _decompose(
    chunk: str,
    alignments: Sequence[Alignment],
    form: CanonicalForm,
) -> list[tuple[str, Alignment]]:
    """Decompose each character, then apply canonical ordering to combining marks.

    Reordering moves the marks only; alignments stay in position order so
    start offsets never decrease.
    """

    pairs = [
        (piece, alignment)
        for char, alignment in zip(chunk, alignments)
        for piece in apply_canonical_form(char, form)
    ]
    ordered: list[tuple[str, Alignment]] = []
    run: list[tuple[str, Alignment]] = []
    for pair in pairs:
        if unicodedata.combining(pair[0]):
            run.append(pair)
            continue
        ordered.extend(_reorder_marks(run))
        run = []
        ordered.append(pair)
    ordered.extend(_reorder_marks(run))
    return ordered


def _reorder_marks(run: list[tuple[str, Alignment]]) -> list[tuple[str, Alignment]]:
    """Sort a run of combining marks by class, keeping alignments in place."""

    marks = sorted((char for char, _ in run), key=unicodedata.combining)
    return list(zip(marks, (alignment for _, alignment in run)))


def _compose(pairs: list[tuple[str, Alignment]], form: CanonicalForm) -> list[tuple[str, Alignment]]:
    """Greedily compose each character with the one emitted before it."""

    composed: list[tuple[str, Alignment]] = []
    for char, alignment in pairs:
        if composed:
            previous_char, previous_alignment = composed[-1]
            candidate = apply_canonical_form(previous_char + char, form)
            if len(candidate) == 1:
                composed[-1] = (candidate, union((previous_alignment, alignment)))
                continue
        composed.append((char, alignment))
    return composed
