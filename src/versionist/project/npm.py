"""npm manifest version updates.

Rewrites package.json and, when present, package-lock.json and
npm-shrinkwrap.json.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from versionist.exceptions import ProjectError

logger = logging.getLogger(__name__)


def read_json(path: Path) -> dict[str, Any]:
    """Read a JSON object from a file.

    Raises:
        FileNotFoundError: If the file does not exist
        ProjectError: If the file is not valid JSON
    """
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {path}: {e}") from e


def update_json(path: Path, data: dict[str, Any]) -> None:
    """Merge top-level keys into a JSON file, keeping two-space indentation."""
    document = read_json(path)
    document.update(data)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n")


def update_npm_version(cwd: Path, new_version: str) -> None:
    """Update the version of an npm package.

    Args:
        cwd: Directory containing package.json
        new_version: New version

    Raises:
        ProjectError: If package.json is missing or invalid
    """
    package_json = cwd / "package.json"
    package_lock = cwd / "package-lock.json"
    shrinkwrap = cwd / "npm-shrinkwrap.json"

    try:
        package = read_json(package_json)
    except FileNotFoundError as e:
        raise ProjectError(f"No such file or directory: {package_json}") from e

    published_at = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    update_json(
        package_json,
        {
            "version": new_version,
            "versionist": {**package.get("versionist", {}), "publishedAt": published_at},
        },
    )
    logger.debug("Updated %s to %s", package_json, new_version)

    if package_lock.is_file():
        lock = read_json(package_lock)
        lock["version"] = new_version
        root_package = lock.get("packages", {}).get("")
        if lock.get("lockfileVersion", 1) >= 2 and root_package and root_package.get("version"):
            root_package["version"] = new_version
        package_lock.write_text(json.dumps(lock, indent=2, ensure_ascii=False) + "\n")
        logger.debug("Updated %s to %s", package_lock, new_version)

    if shrinkwrap.is_file():
        update_json(shrinkwrap, {"version": new_version})
        logger.debug("Updated %s to %s", shrinkwrap, new_version)
