"""Configuration resolution.

Turns a sparse user configuration, where values may be literals or preset
references, into a complete mapping of concrete values.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from versionist.config.models import DESCRIPTORS, PresetRef, PropertyDescriptor, ValueType, shape_of
from versionist.exceptions import InvalidOptionValueError, InvalidPresetError

if TYPE_CHECKING:
    from versionist.presets.registry import PresetRegistry


def get_property_value(name: str, descriptor: PropertyDescriptor, data: Mapping[str, Any]) -> Any:
    """Read a property, falling back to its default when absent or None."""
    value = data.get(name)
    if value is None:
        return descriptor.get_default()
    return value


def resolve_preset(
    name: str,
    descriptor: PropertyDescriptor,
    registry: PresetRegistry,
    value: Any,
) -> Any:
    """Resolve a value that may reference a preset.

    A mapping with a ``preset`` key must name a registered preset. A bare
    string names a preset when one is registered under that name; otherwise
    it stays a literal if the property accepts strings.

    Args:
        name: Property name
        descriptor: Property descriptor
        registry: Preset registry
        value: Raw value

    Returns:
        The preset implementation (bound to its options when the property
        is a function), or the value unchanged

    Raises:
        InvalidPresetError: If the value references an unknown preset
    """
    reference = PresetRef.from_value(value)
    if reference is None:
        return value

    preset = registry.get(name, reference.name)
    if preset is None:
        if isinstance(value, str) and descriptor.accepts(ValueType.STRING):
            return value
        raise InvalidPresetError(name, reference.name)

    if descriptor.accepts(ValueType.FUNCTION):
        return functools.partial(preset, dict(reference.options))
    return preset


def is_value_valid(descriptor: PropertyDescriptor, value: Any) -> bool:
    """Check a value's shape against a property descriptor."""
    shape = shape_of(value)

    if shape is ValueType.ARRAY and descriptor.is_array:
        return all(any(shape_of(item) is allowed for allowed in descriptor.types) for item in value)

    if len(descriptor.types) > 1:
        return descriptor.accepts(shape)

    if shape is ValueType.ARRAY:
        return all(shape_of(item) is descriptor.types[0] for item in value)

    return shape is descriptor.types[0]


def resolve_property(
    name: str,
    descriptor: PropertyDescriptor,
    data: Mapping[str, Any],
    registry: PresetRegistry,
) -> Any:
    """Resolve and validate one property.

    Raises:
        InvalidPresetError: If the value references an unknown preset
        InvalidOptionValueError: If the value has the wrong shape
    """
    value = get_property_value(name, descriptor, data)

    if descriptor.allows_presets:
        value = resolve_preset(name, descriptor, registry, value)
        if isinstance(value, list | tuple):
            value = [resolve_preset(name, descriptor, registry, item) for item in value]

    if not is_value_valid(descriptor, value):
        raise InvalidOptionValueError(name, descriptor.expected, str(shape_of(value)), value)

    return value


def resolve_configuration(
    data: Mapping[str, Any],
    registry: PresetRegistry,
    descriptors: Mapping[str, PropertyDescriptor] = DESCRIPTORS,
) -> dict[str, Any]:
    """Resolve a configuration mapping.

    The result has exactly one entry per descriptor. Keys of data that no
    descriptor knows about are ignored.

    Args:
        data: User configuration
        registry: Preset registry to resolve references against
        descriptors: Property descriptors

    Returns:
        Mapping of property names to concrete values

    Raises:
        InvalidPresetError: If a value references an unknown preset
        InvalidOptionValueError: If a value has the wrong shape
    """
    return {
        name: resolve_property(name, descriptor, data, registry) for name, descriptor in descriptors.items()
    }
