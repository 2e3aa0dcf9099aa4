"""Range specification resolution.

Responsibilities:
- Accept a single index, an explicit `(start, end)` pair, or a `slice`.
- Resolve the specification into a half-open character range for a known length.
"""

from __future__ import annotations

from ..errors import RangeError

RangeSpec = int | tuple[int, int] | slice


def resolve_range(spec: RangeSpec, length: int) -> tuple[int, int]:
    """Resolve a range specification into a canonical `[start, end)` range.

    Args:
        spec: Single index (negative counts from the end), `(start, end)` pair,
            or a `slice` with a step of 1.
        length: Character count the specification is resolved against.

    Returns:
        A `(start, end)` tuple. Non-negative single indexes are not bound-checked
        here; the offset index reports them as unreachable.

    Raises:
        RangeError: If a negative index exceeds `length`, a pair holds negative
            values, the slice step is not 1, or the spec type is unsupported.
    """

    if isinstance(spec, bool):
        raise _unsupported(spec)

    if isinstance(spec, int):
        if spec < 0:
            magnitude = -spec
            if magnitude > length:
                raise RangeError(
                    operation="range",
                    detail=f"{magnitude} is bigger than max len {length}.",
                )
            return length - magnitude, length - magnitude + 1
        return spec, spec + 1

    if isinstance(spec, slice):
        start, stop, step = spec.indices(length)
        if step != 1:
            raise RangeError(
                operation="range",
                detail=f"Slice step must be 1, got {step}.",
                hint="Use contiguous slices such as `ns[1:4]`.",
            )
        return start, max(start, stop)

    if isinstance(spec, tuple) and len(spec) == 2:
        start, end = spec
        if not _is_plain_int(start) or not _is_plain_int(end):
            raise _unsupported(spec)
        if start < 0 or end < 0:
            raise RangeError(
                operation="range",
                detail=f"Range bounds must be non-negative, got ({start}, {end}).",
            )
        return start, end

    raise _unsupported(spec)


def _is_plain_int(value: object) -> bool:
    """Return whether a value is an `int` but not a `bool`."""

    return isinstance(value, int) and not isinstance(value, bool)


def _unsupported(spec: object) -> RangeError:
    """Build the error used for unsupported range specification types."""

    return RangeError(
        operation="range",
        detail=f"Unsupported range specification: {spec!r}.",
        hint="Use an `int`, a `(start, end)` tuple, or a `slice`.",
    )
