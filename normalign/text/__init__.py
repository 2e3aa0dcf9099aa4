"""Alignment-preserving text normalization components.

This package provides the `NormalizedString` entity together with the range,
offset, pattern, and split-grouping building blocks it is composed from.
"""

from .handle import NormalizedStringRefMut, borrow
from .normalized import NormalizedString
from .offsets import OffsetIndex, char_to_bytes
from .patterns import CharPattern, MatchSpan, Pattern, Regex, StringPattern, to_pattern
from .ranges import resolve_range
from .splitting import SplitDelimiterBehavior, group_spans
from .steps import (
    Append,
    CanonicalFormStep,
    CustomStep,
    FilterCategories,
    Lowercase,
    Prepend,
    Replace,
    StepSpec,
    Strip,
    Uppercase,
    build_step,
)
from .unicode import CanonicalForm, apply_canonical_form

__all__ = [
    "NormalizedString",
    "NormalizedStringRefMut",
    "borrow",
    "OffsetIndex",
    "char_to_bytes",
    "Pattern",
    "MatchSpan",
    "CharPattern",
    "StringPattern",
    "Regex",
    "to_pattern",
    "resolve_range",
    "SplitDelimiterBehavior",
    "group_spans",
    "CanonicalForm",
    "apply_canonical_form",
    "StepSpec",
    "build_step",
    "CanonicalFormStep",
    "Lowercase",
    "Uppercase",
    "Strip",
    "Prepend",
    "Append",
    "Replace",
    "FilterCategories",
    "CustomStep",
]
