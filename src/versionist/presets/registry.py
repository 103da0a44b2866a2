"""Preset registry.

Maps configuration property names to named preset implementations. A
registry is built once at program start and handed to the configuration
resolver; nothing looks presets up through module globals.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F")


class PresetRegistry:
    """Named preset implementations, grouped by configuration property.

    Implementations of function-typed properties receive their options
    mapping as the first positional argument. For string-typed properties
    (``template``) the implementation is the string itself.
    """

    def __init__(self) -> None:
        self._presets: dict[str, dict[str, Any]] = {}

    def register(self, property_name: str, name: str, implementation: Any) -> None:
        """Register a preset, replacing any previous one with the same name."""
        self._presets.setdefault(property_name, {})[name] = implementation

    def preset(self, property_name: str, name: str) -> Callable[[F], F]:
        """Decorator form of register()."""

        def decorator(function: F) -> F:
            self.register(property_name, name, function)
            return function

        return decorator

    def get(self, property_name: str, name: str) -> Any | None:
        """Look up a preset, returning None when it is not registered."""
        return self._presets.get(property_name, {}).get(name)
