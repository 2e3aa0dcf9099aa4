"""Character/byte offset conversion for UTF-8 text.

Responsibilities:
- Map character positions to UTF-8 byte positions and back.
- Report unreachable ranges as `None` instead of raising.

Key types:
- `OffsetIndex`: precomputed byte boundaries for one string.
"""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate


def utf8_width(char: str) -> int:
    """Return the number of UTF-8 bytes used to encode one character."""

    code_point = ord(char)
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


class OffsetIndex:
    """Byte boundaries of every character in a string.

    `boundaries[i]` is the byte offset where character `i` starts; the final
    entry is the total byte length.
    """

    __slots__ = ("_text", "_boundaries")

    def __init__(self, text: str) -> None:
        self._text = text
        self._boundaries = list(accumulate((utf8_width(char) for char in text), initial=0))

    def __len__(self) -> int:
        return len(self._text)

    @property
    def byte_length(self) -> int:
        return self._boundaries[-1]

    def byte_offset(self, index: int) -> int:
        """Return the byte offset where character `index` starts."""

        return self._boundaries[index]

    def char_spans(self) -> list[tuple[int, int]]:
        """Return the byte range of every character, in order."""

        return list(zip(self._boundaries, self._boundaries[1:]))

    def char_to_bytes(self, start: int, end: int) -> tuple[int, int] | None:
        """Convert a character range to a byte range, or `None` when out of bounds."""

        if start < 0 or end < start or end > len(self._text):
            return None
        return self._boundaries[start], self._boundaries[end]

    def byte_to_char(self, offset: int) -> int | None:
        """Return the character index starting at byte `offset`, or `None` mid-character."""

        position = bisect_left(self._boundaries, offset)
        if position < len(self._boundaries) and self._boundaries[position] == offset:
            return position
        return None

    def bytes_to_chars(self, start: int, end: int) -> tuple[int, int] | None:
        """Convert a byte range to a character range, or `None` off a boundary."""

        char_start = self.byte_to_char(start)
        char_end = self.byte_to_char(end)
        if char_start is None or char_end is None or char_end < char_start:
            return None
        return char_start, char_end


def char_to_bytes(text: str, start: int, end: int) -> tuple[int, int] | None:
    """Convert a character range of `text` into a UTF-8 byte range."""

    return OffsetIndex(text).char_to_bytes(start, end)
