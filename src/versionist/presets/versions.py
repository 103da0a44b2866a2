"""Manifest version updater presets.

Each updater receives its options, the project directory and the new
version, and sanitizes the version through the ``clean`` option first.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from versionist.exceptions import InvalidVersionError, ProjectError, VersionistError
from versionist.presets.changelog import get_clean_function
from versionist.project import (
    update_cargo_version,
    update_init_py_version,
    update_npm_version,
    update_pyproject_version,
    update_quoted_version,
    write_version_file,
)

logger = logging.getLogger(__name__)


def _cleaned(options: dict[str, Any], version: str) -> str:
    cleaned = get_clean_function(options)(version)
    if not cleaned:
        raise InvalidVersionError(version)
    return cleaned


def npm(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Update package.json and the npm lock files."""
    update_npm_version(Path(cwd), _cleaned(options, version))


def cargo(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Update Cargo.toml and Cargo.lock."""
    update_cargo_version(Path(cwd), _cleaned(options, version))


def pyproject(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Update the version in pyproject.toml."""
    update_pyproject_version(Path(cwd), _cleaned(options, version))


def init_py(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Update ``__version__`` in a Python module (``target_file``, default ``__init__.py``)."""
    target = Path(cwd) / options.get("target_file", "__init__.py")
    update_init_py_version(target, _cleaned(options, version))


def quoted(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Update the quoted version following the ``regex`` option in ``file``.

    Raises:
        ProjectError: If the ``file`` or ``regex`` option is missing
    """
    if options.get("file") is None:
        raise ProjectError("Missing file option")
    if options.get("regex") is None:
        raise ProjectError("Missing regex option")

    update_quoted_version(
        Path(cwd),
        _cleaned(options, version),
        file=options["file"],
        regex=options["regex"],
        regex_flags=options.get("regex_flags", ""),
        base_dir=options.get("base_dir", "."),
    )


def update_version_file(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Write the version, as given, to a VERSION file."""
    write_version_file(Path(cwd), version)


def mixed(options: dict[str, Any], cwd: str | Path, version: str) -> None:
    """Try every known manifest updater.

    Failures of individual updaters are logged and otherwise ignored, so
    projects with any subset of these manifests are supported.
    """
    for updater in (npm, cargo, update_version_file, init_py, pyproject):
        try:
            updater(dict(options), cwd, version)
        except (OSError, VersionistError) as e:
            logger.info("Skipping %s version update: %s", updater.__name__, e)
