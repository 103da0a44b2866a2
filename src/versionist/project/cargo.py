"""Cargo crate version updates."""

from __future__ import annotations

import re
from pathlib import Path

from versionist.exceptions import ProjectError, VersionNotFoundError
from versionist.project.files import replace_in_file

# First `name = "..."` right after [package]
PACKAGE_NAME_PATTERN = re.compile(r"\[package\][^\[]+?name\s*=\s*([\"'])(.+?)\1", re.MULTILINE)
# First `version = "..."` right after [package]
PACKAGE_VERSION_PATTERN = re.compile(r"(\[package\][^\[]+?version\s*=\s*)([\"']).*?\2", re.MULTILINE)


def update_cargo_version(cwd: Path, new_version: str) -> None:
    """Update the version of a Cargo crate.

    Cargo.lock, when present, gets the version of the crate's own entry
    updated too.

    Args:
        cwd: Directory containing Cargo.toml
        new_version: New version

    Raises:
        ProjectError: If Cargo.toml is missing
        VersionNotFoundError: If the package name or version cannot be found
    """
    cargo_toml = cwd / "Cargo.toml"
    cargo_lock = cwd / "Cargo.lock"

    if not cargo_toml.is_file():
        raise ProjectError(f"No such file or directory: {cargo_toml}")

    match = PACKAGE_NAME_PATTERN.search(cargo_toml.read_text())
    if match is None:
        raise VersionNotFoundError(f"Package name not found in {cargo_toml}")
    package_name = match.group(2)

    if cargo_lock.is_file():
        lock_pattern = re.compile(
            rf"(name\s*=\s*[\"']{re.escape(package_name)}[\"'][^\[]+?version\s*=\s*)([\"']).*?\2",
            re.MULTILINE,
        )
        replace_in_file(cargo_lock, lock_pattern, new_version, count=1)

    replace_in_file(cargo_toml, PACKAGE_VERSION_PATTERN, new_version, count=1)
