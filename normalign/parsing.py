"""Parsing helpers for normalization step configuration.

Values reach the config from YAML documents, `NORMALIGN_*` environment
variables, and CLI options. Flags may therefore be real booleans or textual
tokens, and step lists may be comma-separated names or structured entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_FLAG_TOKENS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def _clean(value: object) -> str | None:
    """Return the stripped text of `value`, or `None` when it is blank."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_flag(value: object, field_name: str, default: bool = False) -> bool:
    """Parse an on/off flag given as a bool or a textual token.

    Missing or blank values fall back to `default`.

    Raises:
        ValueError: If the token is not an accepted boolean spelling.
    """

    if isinstance(value, bool):
        return value
    token = _clean(value)
    if token is None:
        return default
    if token.lower() not in _FLAG_TOKENS:
        raise ValueError(
            f"`{field_name}` must be a boolean value "
            f"(`true`/`false`, `1`/`0`, `yes`/`no`, `on`/`off`), got {token!r}."
        )
    return _FLAG_TOKENS[token.lower()]


def parse_step_names(value: object) -> list[str]:
    """Split a comma-separated step list such as `"nfkd, lowercase"`."""

    text = _clean(value)
    if text is None:
        return []
    return [name.strip() for name in text.split(",") if name.strip()]


def parse_step_entry(entry: object, label: str) -> tuple[str, dict[str, Any]]:
    """Return the name and options of one structured step entry.

    Accepted shapes: `"nfkd"`, `{"name": "replace", "pattern": ...}`, or
    `{"replace": {"pattern": ...}}`. `label` prefixes error messages.

    Raises:
        ValueError: If the entry has no name or its options are not a mapping.
    """

    if isinstance(entry, str):
        return _step_name(entry, label), {}
    if isinstance(entry, Mapping) and "name" in entry:
        options = {str(key): item for key, item in entry.items() if key != "name"}
        return _step_name(entry["name"], label), options
    if isinstance(entry, Mapping) and len(entry) == 1:
        ((name, options),) = entry.items()
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValueError(f"{label} (`{name}`) options must be a mapping.")
        return _step_name(name, label), {str(key): item for key, item in options.items()}
    raise ValueError(f"{label} has an unsupported shape.")


def _step_name(value: object, label: str) -> str:
    name = _clean(value)
    if name is None:
        raise ValueError(f"{label} has an empty name.")
    return name


def require_text_option(options: Mapping[str, Any], key: str, step_name: str) -> str:
    """Return a non-empty text option of a step.

    Raises:
        ValueError: If the option is missing or empty.
    """

    value = options.get(key)
    if value is None or value == "":
        raise ValueError(f"Step `{step_name}` requires option `{key}`.")
    return str(value)
