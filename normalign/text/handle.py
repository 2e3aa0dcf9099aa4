"""Scoped mutable access to a `NormalizedString`.

Responsibilities:
- Lend a live normalized string to external callback code for one call.
- Refuse every access once the lending scope has ended.

Key types:
- `NormalizedStringRefMut`: forwarding handle with a liveness flag.
- `borrow`: context manager that creates and invalidates a handle.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger

from ..errors import HandleExpired
from .callbacks import CharObserver, CharPredicate, CharTransform
from .normalized import NormalizedString
from .patterns import PatternLike
from .ranges import RangeSpec
from .splitting import SplitDelimiterBehavior
from .unicode import Alignment, CanonicalForm


class NormalizedStringRefMut:
    """Revocable reference forwarding to a wrapped `NormalizedString`.

    After `destroy()` every method raises `HandleExpired` and the wrapped
    instance is no longer reachable through the handle.
    """

    __slots__ = ("_target",)

    def __init__(self, normalized: NormalizedString) -> None:
        self._target: NormalizedString | None = normalized

    @property
    def alive(self) -> bool:
        return self._target is not None

    def destroy(self) -> None:
        """Invalidate the handle; later calls raise `HandleExpired`."""

        if self._target is not None:
            logger.debug("scoped handle invalidated")
        self._target = None

    def _get(self, operation: str) -> NormalizedString:
        """Return the wrapped instance or raise when the scope has ended."""

        if self._target is None:
            raise HandleExpired(
                operation=operation,
                detail="Cannot use a NormalizedStringRefMut outside the scope it was lent for.",
                hint="Copy the text you need with `slice` before the callback returns.",
            )
        return self._target

    @property
    def original(self) -> str:
        return self._get("original").original

    @property
    def normalized(self) -> str:
        return self._get("normalized").normalized

    @property
    def alignments(self) -> tuple[Alignment, ...]:
        return self._get("alignments").alignments

    def apply_canonical_form(self, form: CanonicalForm | str) -> None:
        self._get("apply_canonical_form").apply_canonical_form(form)

    def nfd(self) -> None:
        self._get("nfd").nfd()

    def nfkd(self) -> None:
        self._get("nfkd").nfkd()

    def nfc(self) -> None:
        self._get("nfc").nfc()

    def nfkc(self) -> None:
        self._get("nfkc").nfkc()

    def lowercase(self) -> None:
        self._get("lowercase").lowercase()

    def uppercase(self) -> None:
        self._get("uppercase").uppercase()

    def prepend(self, text: str) -> None:
        self._get("prepend").prepend(text)

    def append(self, text: str) -> None:
        self._get("append").append(text)

    def lstrip(self) -> None:
        self._get("lstrip").lstrip()

    def rstrip(self) -> None:
        self._get("rstrip").rstrip()

    def strip(self) -> None:
        self._get("strip").strip()

    def clear(self) -> None:
        self._get("clear").clear()

    def filter(self, func: CharPredicate) -> None:
        self._get("filter").filter(func)

    def map(self, func: CharTransform) -> None:
        self._get("map").map(func)

    def for_each(self, func: CharObserver) -> None:
        self._get("for_each").for_each(func)

    def replace(self, pattern: PatternLike, content: str) -> None:
        self._get("replace").replace(pattern, content)

    def split(
        self,
        pattern: PatternLike,
        behavior: SplitDelimiterBehavior | str,
    ) -> list[NormalizedString]:
        return self._get("split").split(pattern, behavior)

    def slice(self, spec: RangeSpec) -> NormalizedString | None:
        return self._get("slice").slice(spec)

    def original_span(self, start: int, end: int) -> Alignment | None:
        return self._get("original_span").original_span(start, end)

    def original_text(self, start: int, end: int) -> str | None:
        return self._get("original_text").original_text(start, end)

    def __getitem__(self, spec: RangeSpec) -> NormalizedString | None:
        return self.slice(spec)

    def __len__(self) -> int:
        return len(self._get("len"))

    def __str__(self) -> str:
        return self.normalized

    def __repr__(self) -> str:
        state = "alive" if self.alive else "expired"
        return f"NormalizedStringRefMut({state})"


@contextmanager
def borrow(normalized: NormalizedString) -> Iterator[NormalizedStringRefMut]:
    """Lend `normalized` as a handle that is invalidated when the block exits."""

    handle = NormalizedStringRefMut(normalized)
    try:
        yield handle
    finally:
        handle.destroy()
