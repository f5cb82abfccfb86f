"""YAML-backed configuration for list-autosum."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from autosum.exceptions import ConfigError


@dataclass
class MatchingConfig:
    """Rules for recognising list and checklist nodes by their type tag."""

    list_types: list[str] = field(
        default_factory=lambda: [
            "bullet_list",
            "ordered_list",
            "checkList",
            "bulletList",
            "orderedList",
            "taskList",
        ]
    )
    list_type_substrings: list[str] = field(
        default_factory=lambda: ["task_list", "check_list", "checklist"]
    )
    checklist_markers: list[str] = field(default_factory=lambda: ["task", "check"])


@dataclass
class LabelConfig:
    """Text used when turning a total into an annotation."""

    total: str = "Auto total: "
    checked: str = "Checked: "
    unchecked: str = "Unchecked: "
    separator: str = ". "


@dataclass
class Config:
    """Top-level autosum configuration."""

    matching: MatchingConfig = field(default_factory=MatchingConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    enabled: bool = True
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        """Load configuration from a YAML file."""
        try:
            text = path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}")

        return cls._from_dict(data)

    @classmethod
    def from_yaml_string(cls, text: str) -> Config:
        """Load configuration from a YAML string."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top level, got {type(data).__name__}")

        matching_data = _section(data, "matching")
        labels_data = _section(data, "labels")

        return cls(
            matching=MatchingConfig(
                **{
                    k: _string_list(f"matching.{k}", v)
                    for k, v in matching_data.items()
                    if k in MatchingConfig.__dataclass_fields__
                }
            ),
            labels=LabelConfig(
                **{k: str(v) for k, v in labels_data.items() if k in LabelConfig.__dataclass_fields__}
            ),
            enabled=bool(data.get("enabled", True)),
            verbose=bool(data.get("verbose", False)),
        )

    @classmethod
    def default(cls) -> Config:
        """Return the default configuration."""
        return cls()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Config:
        """Load config from path, or return defaults if path is None."""
        if path is None:
            return cls.default()
        return cls.from_yaml(path)


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _string_list(name: str, value) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{name}' must be a list of strings, got {type(value).__name__}")
    return [str(v) for v in value]
