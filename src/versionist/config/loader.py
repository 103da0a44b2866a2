"""Configuration file discovery and loading.

Configuration may live in:
1. An explicit file given on the command line (``.py`` or ``.toml``)
2. versionist.conf.py in the project directory
3. pyproject.toml under [tool.versionist]

With none of these, the built-in defaults apply.
"""

from __future__ import annotations

import importlib.util
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from versionist.config.models import DESCRIPTORS, VersionistConfig
from versionist.config.resolver import resolve_configuration
from versionist.exceptions import ConfigError, ConfigNotFoundError, ConfigSyntaxError

if TYPE_CHECKING:
    from versionist.presets.registry import PresetRegistry

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "versionist.conf.py"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_SECTION = "versionist"


def find_config_file(path: Path) -> Path | None:
    """Find the configuration file of a project.

    Args:
        path: Project directory

    Returns:
        Path to versionist.conf.py, or to a pyproject.toml that has a
        [tool.versionist] table, or None
    """
    config_file = path / CONFIG_FILENAME
    if config_file.is_file():
        return config_file

    pyproject = path / PYPROJECT_FILENAME
    if pyproject.is_file():
        try:
            data = _read_toml(pyproject)
        except ConfigSyntaxError:
            return None
        if TOOL_SECTION in data.get("tool", {}):
            return pyproject

    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigSyntaxError(f"Syntax error in configuration file: {path}") from e


def _read_python(path: Path) -> dict[str, Any]:
    spec = importlib.util.spec_from_file_location(f"_versionist_conf_{path.stem.replace('.', '_')}", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot load configuration file: {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        raise ConfigSyntaxError(f"Syntax error in configuration file: {path}") from e

    return {name: getattr(module, name) for name in DESCRIPTORS if hasattr(module, name)}


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the raw configuration mapping from a file.

    Args:
        path: Path to a ``.py`` or ``.toml`` configuration file

    Returns:
        Configuration mapping, before preset resolution

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigSyntaxError: If the file cannot be parsed
        ConfigError: If the file type is not supported
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    if path.suffix == ".py":
        return _read_python(path)

    if path.suffix == ".toml":
        data = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            return dict(data.get("tool", {}).get(TOOL_SECTION, {}))
        # A standalone TOML file may still nest its settings like pyproject.toml
        return dict(data.get("tool", {}).get(TOOL_SECTION, data))

    raise ConfigError(f"Unsupported configuration file type: {path}")


def load_config(
    path: Path | None = None,
    *,
    config_file: Path | str | None = None,
    registry: PresetRegistry | None = None,
) -> VersionistConfig:
    """Load and resolve the versionist configuration.

    Args:
        path: Project directory (defaults to the current directory)
        config_file: Explicit configuration file, relative to path
        registry: Preset registry (defaults to the built-in presets)

    Returns:
        Fully resolved configuration

    Raises:
        ConfigNotFoundError: If an explicit config_file does not exist
        ConfigSyntaxError: If the configuration file cannot be parsed
        InvalidPresetError: If a value references an unknown preset
        InvalidOptionValueError: If a value has the wrong shape
        ConfigError: If the resolved configuration is invalid
    """
    if registry is None:
        from versionist.presets import build_default_registry

        registry = build_default_registry()

    project_path = (path or Path.cwd()).resolve()

    if config_file is not None:
        source: Path | None = Path(config_file)
        if not source.is_absolute():
            source = project_path / source
    else:
        source = find_config_file(project_path)

    data: dict[str, Any] = {}
    if source is not None:
        logger.debug("Loading configuration from %s", source)
        data = read_config_file(source)
    else:
        logger.debug("No configuration file found in %s, using defaults", project_path)

    data.setdefault("path", str(project_path))

    resolved = resolve_configuration(data, registry)

    try:
        return VersionistConfig(**resolved)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
