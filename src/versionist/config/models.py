"""Configuration property descriptors and the resolved configuration model.

Every configurable behaviour is described by a PropertyDescriptor: the
value shapes it accepts, its default, and whether it may name a preset.
Presets are referenced either by name (``"npm"``) or by a mapping carrying
the name and options (``{"preset": "prepend", "from_line": 5}``).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueType(StrEnum):
    """Closed set of value shapes a configuration property may accept."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    FUNCTION = "function"
    OBJECT = "object"
    ARRAY = "array"


def shape_of(value: object) -> ValueType:
    """Get the shape of a configuration value."""
    match value:
        case bool():
            return ValueType.BOOLEAN
        case str():
            return ValueType.STRING
        case int() | float():
            return ValueType.NUMBER
        case list() | tuple():
            return ValueType.ARRAY
        case _ if callable(value):
            return ValueType.FUNCTION
        case _:
            return ValueType.OBJECT


@dataclass(frozen=True)
class PresetRef:
    """A reference to a registered preset, plus options bound to it."""

    name: str
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: object) -> PresetRef | None:
        """Interpret a raw configuration value as a preset reference.

        Returns:
            A PresetRef for a bare string or a mapping with a string
            ``preset`` key, None for anything else
        """
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, Mapping) and isinstance(value.get("preset"), str):
            options = {key: option for key, option in value.items() if key != "preset"}
            return cls(name=value["preset"], options=options)
        return None


@dataclass(frozen=True)
class PropertyDescriptor:
    """Metadata for one configurable property."""

    types: tuple[ValueType, ...]
    default: Any = None
    default_factory: Callable[[], Any] | None = None
    allows_presets: bool = False

    @property
    def is_array(self) -> bool:
        return ValueType.ARRAY in self.types

    @property
    def expected(self) -> str:
        return " or ".join(str(value_type) for value_type in self.types)

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def accepts(self, value_type: ValueType) -> bool:
        return value_type in self.types


def identity(value: Any) -> Any:
    """Return the value unchanged."""
    return value


async def async_identity(value: Any) -> Any:
    """Return the value unchanged, asynchronously."""
    return value


_STRING = (ValueType.STRING,)
_BOOLEAN = (ValueType.BOOLEAN,)
_FUNCTION = (ValueType.FUNCTION,)

DESCRIPTORS: dict[str, PropertyDescriptor] = {
    "path": PropertyDescriptor(_STRING, default_factory=os.getcwd),
    "changelog_file": PropertyDescriptor(_STRING, default="CHANGELOG.md"),
    "history_file": PropertyDescriptor(_STRING, default=os.path.join(".versionbot", "CHANGELOG.yml")),
    "default_initial_version": PropertyDescriptor(_STRING, default="0.0.1"),
    "git_directory": PropertyDescriptor(_STRING, default=".git"),
    "parse_footer_tags": PropertyDescriptor(_BOOLEAN, default=True),
    "lower_case_footer_tags": PropertyDescriptor(_BOOLEAN, default=True),
    "edit_changelog": PropertyDescriptor(_BOOLEAN, default=True),
    "edit_version": PropertyDescriptor(_BOOLEAN, default=True),
    "include_merge_commits": PropertyDescriptor(_BOOLEAN, default=False),
    "subject_parser": PropertyDescriptor(_FUNCTION, default=identity, allows_presets=True),
    "body_parser": PropertyDescriptor(_FUNCTION, default=identity, allows_presets=True),
    "include_commit_when": PropertyDescriptor(_FUNCTION, default="has-changetype", allows_presets=True),
    "transform_template_data": PropertyDescriptor(_FUNCTION, default="changelog-entry", allows_presets=True),
    "transform_template_data_async": PropertyDescriptor(_FUNCTION, default=async_identity, allows_presets=True),
    "get_changelog_documented_versions": PropertyDescriptor(
        _FUNCTION, default="changelog-headers", allows_presets=True
    ),
    "get_current_base_version": PropertyDescriptor(_FUNCTION, default="latest-documented", allows_presets=True),
    "get_increment_level_from_commit": PropertyDescriptor(
        _FUNCTION, default="change-type-or-subject", allows_presets=True
    ),
    "increment_version": PropertyDescriptor(_FUNCTION, default="semver", allows_presets=True),
    "get_git_reference_from_version": PropertyDescriptor(_FUNCTION, default="v-prefix", allows_presets=True),
    "add_entry_to_changelog": PropertyDescriptor(
        _FUNCTION, default_factory=lambda: {"preset": "prepend", "from_line": 6}, allows_presets=True
    ),
    "update_version": PropertyDescriptor(
        (ValueType.FUNCTION, ValueType.ARRAY), default="npm", allows_presets=True
    ),
    "template": PropertyDescriptor(_STRING, default="default", allows_presets=True),
    "add_entry_to_history_file": PropertyDescriptor(_FUNCTION, default="yml-prepend", allows_presets=True),
}


class VersionistConfig(BaseModel):
    """Fully resolved versionist configuration.

    Every hook is a plain callable: presets have already been looked up
    and bound to their options.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, extra="forbid")

    path: str
    changelog_file: str
    history_file: str
    default_initial_version: str
    git_directory: str
    parse_footer_tags: bool
    lower_case_footer_tags: bool
    edit_changelog: bool
    edit_version: bool
    include_merge_commits: bool
    subject_parser: Callable[..., Any]
    body_parser: Callable[..., Any]
    include_commit_when: Callable[..., Any]
    transform_template_data: Callable[..., Any]
    transform_template_data_async: Callable[..., Any]
    get_changelog_documented_versions: Callable[..., Any]
    get_current_base_version: Callable[..., Any]
    get_increment_level_from_commit: Callable[..., Any]
    increment_version: Callable[..., Any]
    get_git_reference_from_version: Callable[..., Any]
    add_entry_to_changelog: Callable[..., Any]
    update_version: Callable[..., Any] | list[Callable[..., Any]]
    template: str
    add_entry_to_history_file: Callable[..., Any]

    def _resolve(self, value: str) -> Path:
        candidate = Path(value)
        if candidate.is_absolute():
            return candidate
        return Path(self.path) / candidate

    @property
    def effective_changelog_path(self) -> Path:
        """Changelog file, relative paths taken from the project path."""
        return self._resolve(self.changelog_file)

    @property
    def effective_history_path(self) -> Path:
        """History file, relative paths taken from the project path."""
        return self._resolve(self.history_file)

    @property
    def effective_git_directory(self) -> Path:
        """Git directory, relative paths taken from the project path."""
        return self._resolve(self.git_directory)

    @property
    def version_updaters(self) -> list[Callable[..., Any]]:
        """Manifest updaters, in the order they run."""
        if isinstance(self.update_version, list):
            return list(self.update_version)
        return [self.update_version]
