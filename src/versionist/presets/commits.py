"""Commit-level presets: subject parsing, filtering and classification."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from typing import Any

from versionist.core.changelog import TemplateData
from versionist.core.commits import Commit
from versionist.exceptions import ChangelogError

# Based on https://github.com/angular/angular.js/blob/master/CONTRIBUTING.md
ANGULAR_SUBJECT_PATTERN = re.compile(r"^(?:fixup!\s*)?(\w*)(\(([\w$.*/-]*)\))?: (.*)$")
ANGULAR_TYPES = ("feat", "fix", "perf")

SUBJECT_LEVEL_PATTERN = re.compile(r"^(patch|minor|major):", re.IGNORECASE)


def is_incremental(change_type: str | None) -> bool:
    """Whether a change type asks for a version bump (anything but ``none``)."""
    return bool(change_type) and change_type.strip().lower() != "none"


def get_change_type(footer: Mapping[str, str | None]) -> str | None:
    """Get the ``Change-Type`` footer, whatever its key casing."""
    for key, value in footer.items():
        if key.lower() == "change-type":
            return value
    return None


# =============================================================================
# subject_parser
# =============================================================================


def angular_subject(options: dict[str, Any], subject: str) -> dict[str, str | None]:
    """Split an angular-style subject into type, scope and title.

    Subjects that do not follow the convention keep the whole subject as
    the title.
    """
    match = ANGULAR_SUBJECT_PATTERN.match(subject)
    if match is None:
        return {"type": None, "scope": None, "title": subject}
    return {
        "type": match.group(1),
        "scope": match.group(3),
        "title": match.group(4) or subject,
    }


# =============================================================================
# include_commit_when
# =============================================================================


def angular_include(options: dict[str, Any], commit: Commit) -> bool:
    """Include feat, fix and perf commits.

    Works with both raw string subjects and subjects parsed by the
    ``angular`` subject parser.
    """
    if isinstance(commit.subject, str):
        return commit.subject.startswith(ANGULAR_TYPES)
    if isinstance(commit.subject, Mapping):
        return commit.subject.get("type") in ANGULAR_TYPES
    return False


def has_change_type(options: dict[str, Any], commit: Commit) -> bool:
    """Include commits with a change type in a footer or in the subject."""
    return is_incremental(get_change_type(commit.footer)) or is_incremental(
        subject_level({}, commit)
    )


def has_changelog_entry(options: dict[str, Any], commit: Commit) -> bool:
    """Include commits carrying a ``changelog-entry`` footer."""
    return bool(commit.footer.get("changelog-entry"))


# =============================================================================
# get_increment_level_from_commit
# =============================================================================


def change_type_level(options: dict[str, Any], commit: Commit) -> str | None:
    """Take the increment level from the ``Change-Type`` footer."""
    change_type = get_change_type(commit.footer)
    if is_incremental(change_type):
        return change_type.strip().lower()
    return None


def subject_level(options: dict[str, Any], commit: Commit) -> str | None:
    """Take the increment level from a ``patch:``/``minor:``/``major:`` subject prefix."""
    if not isinstance(commit.subject, str):
        return None
    match = SUBJECT_LEVEL_PATTERN.match(commit.subject)
    if match and is_incremental(match.group(1)):
        return match.group(1).strip().lower()
    return None


def change_type_or_subject_level(options: dict[str, Any], commit: Commit) -> str | None:
    """Prefer the ``Change-Type`` footer, fall back to the subject prefix."""
    level = change_type_level(options, commit)
    if level is not None:
        return level
    return subject_level(options, commit)


# =============================================================================
# transform_template_data
# =============================================================================


def changelog_entry(options: dict[str, Any], data: TemplateData) -> TemplateData:
    """Use the ``changelog-entry`` footer as the subject when present.

    Raises:
        ChangelogError: If every commit was filtered out
    """
    if not data.commits:
        raise ChangelogError("All commits were filtered out for this version")

    commits = [
        dataclasses.replace(commit, subject=commit.footer.get("changelog-entry") or commit.subject)
        if isinstance(commit, Commit)
        else commit
        for commit in data.commits
    ]
    return dataclasses.replace(data, commits=commits)
