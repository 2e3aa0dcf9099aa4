"""Composable normalization steps.

Responsibilities:
- Provide reusable steps that mutate a `NormalizedString` in place.
- Build steps from configuration names and options.
- Lend scoped handles to user-defined normalizers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol
import unicodedata

from ..parsing import parse_flag, require_text_option
from .handle import NormalizedStringRefMut, borrow
from .normalized import NormalizedString
from .patterns import PatternLike, Regex
from .unicode import CanonicalForm


class NormalizationStep(Protocol):
    """Protocol for in-place normalization steps."""

    name: str

    def apply(self, normalized: NormalizedString) -> None:
        """Apply a single normalization transformation."""


class CustomNormalizer(Protocol):
    """Protocol for user objects receiving a scoped handle."""

    def normalize(self, normalized: NormalizedStringRefMut) -> None:
        """Mutate the lent string through the handle."""


class CanonicalFormStep:
    """Apply a Unicode normalization form."""

    def __init__(self, form: CanonicalForm | str) -> None:
        self.form = CanonicalForm(form)
        self.name = self.form.value.lower()

    def apply(self, normalized: NormalizedString) -> None:
        normalized.apply_canonical_form(self.form)


class Lowercase:
    """Lowercase every character."""

    name = "lowercase"

    def apply(self, normalized: NormalizedString) -> None:
        normalized.lowercase()


class Uppercase:
    """Uppercase every character."""

    name = "uppercase"

    def apply(self, normalized: NormalizedString) -> None:
        normalized.uppercase()


class Strip:
    """Trim whitespace from one or both ends."""

    def __init__(self, left: bool = True, right: bool = True) -> None:
        self.left = left
        self.right = right
        if left and right:
            self.name = "strip"
        elif left:
            self.name = "lstrip"
        elif right:
            self.name = "rstrip"
        else:
            self.name = "noop_strip"

    def apply(self, normalized: NormalizedString) -> None:
        if self.left and self.right:
            normalized.strip()
        elif self.left:
            normalized.lstrip()
        elif self.right:
            normalized.rstrip()


class Prepend:
    """Insert fixed text before the content."""

    name = "prepend"

    def __init__(self, text: str) -> None:
        self.text = text

    def apply(self, normalized: NormalizedString) -> None:
        normalized.prepend(self.text)


class Append:
    """Insert fixed text after the content."""

    name = "append"

    def __init__(self, text: str) -> None:
        self.text = text

    def apply(self, normalized: NormalizedString) -> None:
        normalized.append(self.text)


class Replace:
    """Replace every match of a literal or regular expression."""

    name = "replace"

    def __init__(self, pattern: PatternLike, content: str) -> None:
        self.pattern = pattern
        self.content = content

    def apply(self, normalized: NormalizedString) -> None:
        normalized.replace(self.pattern, self.content)


class FilterCategories:
    """Drop characters whose Unicode general category is listed.

    The default (`Mn`) removes nonspacing marks, which strips accents after a
    decomposing canonical form.
    """

    def __init__(self, categories: Iterable[str] = ("Mn",), name: str = "filter_categories") -> None:
        self.categories = frozenset(categories)
        self.name = name

    def _keep(self, char: str) -> bool:
        return unicodedata.category(char) not in self.categories

    def apply(self, normalized: NormalizedString) -> None:
        normalized.filter(self._keep)


class CustomStep:
    """Run a user normalizer against a handle valid only during the call."""

    def __init__(self, normalizer: CustomNormalizer, name: str | None = None) -> None:
        self.normalizer = normalizer
        self.name = name or type(normalizer).__name__

    def apply(self, normalized: NormalizedString) -> None:
        with borrow(normalized) as handle:
            self.normalizer.normalize(handle)


@dataclass(frozen=True, slots=True)
class StepSpec:
    """Configured step name with its options.

    Attributes:
        name: Step identifier, e.g. `nfkd` or `replace`.
        options: Step-specific keyword options.
    """

    name: str
    options: Mapping[str, Any] = field(default_factory=dict)


_SIMPLE_STEPS = {
    "lowercase": Lowercase,
    "uppercase": Uppercase,
    "strip": lambda: Strip(left=True, right=True),
    "lstrip": lambda: Strip(left=True, right=False),
    "rstrip": lambda: Strip(left=False, right=True),
    "strip_accents": lambda: FilterCategories(("Mn",), name="strip_accents"),
}

SUPPORTED_STEPS = frozenset(
    {"nfc", "nfd", "nfkc", "nfkd", "prepend", "append", "replace", "filter_categories"}
    | set(_SIMPLE_STEPS)
)


def build_step(spec: StepSpec) -> NormalizationStep:
    """Create a normalization step from its configured specification.

    Raises:
        ValueError: If the step name is unknown or required options are missing.
    """

    name = spec.name.strip().lower()
    options = spec.options
    if name in {"nfc", "nfd", "nfkc", "nfkd"}:
        return CanonicalFormStep(name)
    if name in _SIMPLE_STEPS:
        return _SIMPLE_STEPS[name]()
    if name == "prepend":
        return Prepend(require_text_option(options, "text", name))
    if name == "append":
        return Append(require_text_option(options, "text", name))
    if name == "replace":
        pattern = require_text_option(options, "pattern", name)
        content = str(options.get("content", ""))
        use_regex = parse_flag(options.get("regex"), "regex")
        return Replace(Regex(pattern) if use_regex else pattern, content)
    if name == "filter_categories":
        categories = options.get("categories")
        if not categories:
            raise ValueError("Step `filter_categories` requires a non-empty `categories` list.")
        return FilterCategories([str(category) for category in categories])

    supported = ", ".join(sorted(SUPPORTED_STEPS))
    raise ValueError(f"Unsupported step `{spec.name}`; supported: {supported}.")

