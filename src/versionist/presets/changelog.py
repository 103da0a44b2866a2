"""Changelog-level presets: documented versions, references and persistence."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from versionist.core.changelog import TemplateData
from versionist.core.commits import Commit
from versionist.core.markdown import extract_titles
from versionist.core.templates import INITIAL_CHANGELOG
from versionist.core.version import clean_version, get_greater_version, increment_version, is_valid_version


def get_clean_function(options: dict[str, Any]) -> Callable[[str], str | None]:
    """Get the version sanitizer selected by the ``clean`` option.

    ``True`` (the default) normalizes to plain semver, ``False`` keeps the
    version as written, and a regex (compiled or as a string) removes
    every match.
    """
    clean = options.get("clean", True)
    if isinstance(clean, re.Pattern):
        return lambda version: clean.sub("", version)
    if isinstance(clean, str):
        pattern = re.compile(clean)
        return lambda version: pattern.sub("", version)
    if clean:
        return clean_version
    return lambda version: version


# =============================================================================
# get_changelog_documented_versions
# =============================================================================


def changelog_headers(options: dict[str, Any], file: str | Path) -> list[str]:
    """Get the versions mentioned in the changelog headers.

    Every whitespace-separated word of every header that is valid semver
    counts. A missing changelog documents no versions.
    """
    clean = get_clean_function(options)

    try:
        changelog = Path(file).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []

    versions: list[str] = []
    for title in extract_titles(changelog):
        for word in title.split(" "):
            if is_valid_version(word):
                cleaned = clean(word)
                if cleaned:
                    versions.append(cleaned)
    return versions


# =============================================================================
# get_current_base_version
# =============================================================================


def latest_documented(options: dict[str, Any], documented_versions: list[str], history: list[Commit]) -> str | None:
    """Use the greatest documented version."""
    return get_greater_version(documented_versions)


# =============================================================================
# get_git_reference_from_version / increment_version
# =============================================================================


def v_prefix(options: dict[str, Any], version: str) -> str:
    """Reference versions by ``v``-prefixed tags."""
    if version.startswith("v"):
        return version
    return f"v{version}"


def semver_increment(options: dict[str, Any], version: str, level: str) -> str:
    """Increment a version following semver."""
    return increment_version(version, level)


# =============================================================================
# add_entry_to_changelog
# =============================================================================


def _merge_blocks(blocks: list[list[str]]) -> list[str]:
    # Blank lines at each seam collapse into exactly one
    merged: list[str] = []
    for block in blocks:
        head = list(merged)
        while head and not head[-1]:
            head.pop()

        start = 0
        while start < len(block) and not block[start]:
            start += 1
        body = block[start:]

        merged = body if not head else [*head, "", *body]
    return merged


def prepend(options: dict[str, Any], file: str | Path, entry: str) -> None:
    """Insert an entry into the changelog.

    The entry goes after the first ``from_line`` lines (default 6, the
    height of the standard header), with a single blank line between it
    and its neighbours. A missing changelog is created with the standard
    header first.
    """
    from_line = int(options.get("from_line", 6))
    path = Path(file)

    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(INITIAL_CHANGELOG, encoding="utf-8")

    lines = path.read_text(encoding="utf-8").split("\n")
    merged = _merge_blocks([lines[:from_line], entry.split("\n"), lines[from_line:]])
    path.write_text("\n".join(merged), encoding="utf-8")


# =============================================================================
# add_entry_to_history_file
# =============================================================================


def yml_prepend(options: dict[str, Any], file: str | Path, raw: TemplateData | dict[str, Any]) -> None:
    """Prepend the raw entry to a YAML history file.

    Nothing happens when the history file does not exist: projects opt in
    by creating it.
    """
    path = Path(file)
    if not path.exists():
        return

    history = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    record = raw.to_dict() if isinstance(raw, TemplateData) else raw
    history.insert(0, record)
    path.write_text(yaml.safe_dump(history, sort_keys=False, allow_unicode=True), encoding="utf-8")
