"""Project manifest version writers."""

from __future__ import annotations

from versionist.project.cargo import update_cargo_version
from versionist.project.files import update_init_py_version, update_quoted_version, write_version_file
from versionist.project.npm import update_npm_version
from versionist.project.pyproject import get_pyproject_version, update_pyproject_version

__all__ = [
    "get_pyproject_version",
    "update_cargo_version",
    "update_init_py_version",
    "update_npm_version",
    "update_pyproject_version",
    "update_quoted_version",
    "write_version_file",
]
