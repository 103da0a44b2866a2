"""pyproject.toml version manipulation.

This module provides functionality for reading and updating
the version number in pyproject.toml files.

It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import re
from pathlib import Path

from versionist.exceptions import ProjectError, VersionNotFoundError

# Section bodies run up to the next table header or the end of the file
SECTION_PATTERNS = (
    r"^\[project\].*?(?=^\[|\Z)",
    r"^\[tool\.poetry\].*?(?=^\[|\Z)",
)
VERSION_LINE_PATTERN = r'^(version\s*=\s*)(["\'])([^"\']+)\2'


def find_pyproject(path: Path) -> Path:
    """Resolve a pyproject.toml path from a file or a project directory.

    Raises:
        ProjectError: If no pyproject.toml exists there
    """
    pyproject_path = path / "pyproject.toml" if path.is_dir() else path
    if not pyproject_path.is_file():
        raise ProjectError(f"No such file or directory: {pyproject_path}")
    return pyproject_path


def get_pyproject_version(path: Path) -> str:
    """Get the version from pyproject.toml.

    Args:
        path: Path to pyproject.toml or the directory containing it

    Returns:
        Version string

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path = find_pyproject(path)
    content = pyproject_path.read_text()

    for section_pattern in SECTION_PATTERNS:
        section = re.search(section_pattern, content, re.MULTILINE | re.DOTALL)
        if section is None:
            continue
        match = re.search(VERSION_LINE_PATTERN, section.group(0), re.MULTILINE)
        if match:
            return match.group(3)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path, new_version: str) -> Path:
    """Update the version in pyproject.toml.

    The [project] table is tried first, then [tool.poetry]. Only the
    first ``version = "..."`` line of the matched table is rewritten and
    its quote style is kept.

    Args:
        path: Path to pyproject.toml or directory containing it
        new_version: New version string to set

    Returns:
        Path to the updated pyproject.toml

    Raises:
        ProjectError: If pyproject.toml does not exist
        VersionNotFoundError: If version cannot be found
    """
    pyproject_path = find_pyproject(path)
    content = pyproject_path.read_text()

    def replace_version(match: re.Match[str]) -> str:
        return re.sub(
            VERSION_LINE_PATTERN,
            lambda line: f"{line.group(1)}{line.group(2)}{new_version}{line.group(2)}",
            match.group(0),
            count=1,
            flags=re.MULTILINE,
        )

    for section_pattern in SECTION_PATTERNS:
        section = re.search(section_pattern, content, re.MULTILINE | re.DOTALL)
        if section is None or not re.search(VERSION_LINE_PATTERN, section.group(0), re.MULTILINE):
            continue

        new_content = re.sub(
            section_pattern,
            replace_version,
            content,
            count=1,
            flags=re.MULTILINE | re.DOTALL,
        )
        pyproject_path.write_text(new_content)
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )
