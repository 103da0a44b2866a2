"""Configuration management for versionist."""

from __future__ import annotations

from versionist.config.loader import find_config_file, load_config, read_config_file
from versionist.config.models import DESCRIPTORS, PresetRef, PropertyDescriptor, ValueType, VersionistConfig
from versionist.config.resolver import resolve_configuration

__all__ = [
    "DESCRIPTORS",
    "PresetRef",
    "PropertyDescriptor",
    "ValueType",
    "VersionistConfig",
    "find_config_file",
    "load_config",
    "read_config_file",
    "resolve_configuration",
]
