"""Configuration model and loaders for normalization runs.

Responsibilities:
- Define the normalization pipeline configuration as a typed dataclass.
- Provide loader entry points for YAML-, mapping-, and environment-based configuration.

Key types:
- `NormalizerConfig`: ordered step specifications plus split settings.
- `ConfigLoader`: static construction helpers for `NormalizerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import PatternError
from .parsing import parse_flag, parse_step_entry, parse_step_names
from .text.patterns import PatternLike, Regex
from .text.splitting import SplitDelimiterBehavior
from .text.steps import NormalizationStep, StepSpec, build_step


@dataclass(frozen=True, slots=True)
class NormalizerConfig:
    """Configuration for one normalization pipeline.

    Attributes:
        steps: Ordered step specifications applied to each input.
        split_pattern: Optional delimiter used by the `split` command.
        split_behavior: Delimiter behavior applied when splitting.
        regex_split: Whether `split_pattern` is a regular expression.
        verbose: Whether step events are logged.
    """

    steps: tuple[StepSpec, ...] = ()
    split_pattern: str | None = None
    split_behavior: SplitDelimiterBehavior = SplitDelimiterBehavior.REMOVED
    regex_split: bool = False
    verbose: bool = False

    def validate(self) -> None:
        """Validate step names/options and the split pattern."""

        self.build_steps()
        try:
            self.split_pattern_object()
        except PatternError as exc:
            raise ValueError(f"`split_pattern` is invalid: {exc.detail}") from exc

    def build_steps(self) -> list[NormalizationStep]:
        """Instantiate the configured steps in order."""

        try:
            return [build_step(spec) for spec in self.steps]
        except PatternError as exc:
            raise ValueError(f"Invalid step pattern: {exc.detail}") from exc

    def split_pattern_object(self) -> PatternLike | None:
        """Return the configured split pattern, compiled when it is a regex."""

        if self.split_pattern is None:
            return None
        if self.regex_split:
            return Regex(self.split_pattern)
        return self.split_pattern


class ConfigLoader:
    """Factory methods for creating `NormalizerConfig` from external sources."""

    _SUPPORTED_KEYS = frozenset(
        {
            "steps",
            "split_pattern",
            "split_behavior",
            "regex_split",
            "verbose",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> NormalizerConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(path_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(payload: Mapping[str, Any], source_label: str = "config") -> NormalizerConfig:
        """Create a validated config from an already parsed mapping."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        steps = ConfigLoader._parse_steps(payload.get("steps"), source_label)
        split_pattern = ConfigLoader._optional_pattern(payload, "split_pattern")
        split_behavior = ConfigLoader._behavior(payload.get("split_behavior"), source_label)
        regex_split = ConfigLoader._optional_boolean(payload, "regex_split", default=False)
        verbose = ConfigLoader._optional_boolean(payload, "verbose", default=False)

        config = NormalizerConfig(
            steps=steps,
            split_pattern=split_pattern,
            split_behavior=split_behavior,
            regex_split=regex_split,
            verbose=verbose,
        )
        config.validate()
        return config

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> NormalizerConfig:
        """Create a validated config from `NORMALIGN_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        steps = tuple(StepSpec(name=name) for name in parse_step_names(env_map.get("NORMALIGN_STEPS")))
        split_pattern = env_map.get("NORMALIGN_SPLIT_PATTERN") or None
        split_behavior = ConfigLoader._behavior(
            env_map.get("NORMALIGN_SPLIT_BEHAVIOR"), "environment"
        )
        regex_split = ConfigLoader._optional_boolean(env_map, "NORMALIGN_REGEX_SPLIT", default=False)
        verbose = ConfigLoader._optional_boolean(env_map, "NORMALIGN_VERBOSE", default=False)

        config = NormalizerConfig(
            steps=steps,
            split_pattern=split_pattern,
            split_behavior=split_behavior,
            regex_split=regex_split,
            verbose=verbose,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_steps(value: object, source_label: str) -> tuple[StepSpec, ...]:
        """Parse step entries given as names or option mappings."""

        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(StepSpec(name=name) for name in parse_step_names(value))
        if not isinstance(value, list):
            raise ValueError(f"{source_label} field `steps` must be a list.")

        specs: list[StepSpec] = []
        for position, entry in enumerate(value, start=1):
            name, options = parse_step_entry(entry, f"{source_label} step #{position}")
            specs.append(StepSpec(name=name, options=options))
        return tuple(specs)

    @staticmethod
    def _optional_pattern(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional pattern; whitespace-only patterns are kept verbatim."""

        value = payload.get(key)
        if value is None or value == "":
            return None
        return str(value)

    @staticmethod
    def _behavior(value: object, source_label: str) -> SplitDelimiterBehavior:
        """Parse an optional split behavior, defaulting to `removed`."""

        if value is None or not str(value).strip():
            return SplitDelimiterBehavior.REMOVED
        try:
            return SplitDelimiterBehavior.parse(str(value))
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc

    @staticmethod
    def _optional_boolean(payload: Mapping[str, Any], key: str, default: bool) -> bool:
        """Read an optional boolean with permissive textual tokens."""

        return parse_flag(payload.get(key), key, default)
