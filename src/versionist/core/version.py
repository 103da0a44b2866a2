"""Semantic versions and increment levels.

Every commit may ask for a patch, minor or major bump. The overall bump of
a batch of commits is the highest level any of them asks for.

Pure implementation: no I/O, no logging.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import StrEnum
from typing import TypeVar

import semver

from versionist.exceptions import EmptyHistoryError, InvalidIncrementLevelError, InvalidVersionError

T = TypeVar("T")


class IncrementLevel(StrEnum):
    """Semantic version increment levels.

    Declaration order is precedence: later members win.
    """

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return list(IncrementLevel).index(self)


def is_valid_increment_level(level: object) -> bool:
    """Check whether a value is patch, minor or major."""
    return isinstance(level, str) and level in {member.value for member in IncrementLevel}


def _coerce_level(level: object) -> IncrementLevel | None:
    if level is None:
        return None
    if not is_valid_increment_level(level):
        raise InvalidIncrementLevelError(level)
    return IncrementLevel(level)


def higher_level(first: object, second: object) -> IncrementLevel | None:
    """Get the higher of two increment levels.

    Args:
        first: An increment level or None
        second: An increment level or None

    Returns:
        The level with the higher precedence, or None if both are None

    Raises:
        InvalidIncrementLevelError: If a non-None value is not a valid level
    """
    first_level = _coerce_level(first)
    second_level = _coerce_level(second)

    if first_level is None:
        return second_level
    if second_level is None:
        return first_level
    return max(first_level, second_level, key=lambda level: level.rank)


def calculate_next_increment_level(
    commits: Sequence[T],
    get_increment_level_from_commit: Callable[[T], object],
) -> IncrementLevel | None:
    """Calculate the increment level required by a batch of commits.

    Args:
        commits: Commits to inspect
        get_increment_level_from_commit: Classifies one commit, returning a
            level name or None

    Returns:
        The highest level across all commits, or None if no commit
        requires a bump

    Raises:
        EmptyHistoryError: If there are no commits
        InvalidIncrementLevelError: If a commit is classified with an unknown level
    """
    if not commits:
        raise EmptyHistoryError("No commits to calculate the next increment level from")

    current: IncrementLevel | None = None
    for commit in commits:
        current = higher_level(get_increment_level_from_commit(commit), current)
    return current


# =============================================================================
# Versions
# =============================================================================


def clean_version(version: str) -> str | None:
    """Normalize a version string.

    Strips surrounding whitespace and a leading ``=`` or ``v``.

    Returns:
        The normalized version, or None if it is not valid semver
    """
    cleaned = version.strip().lstrip("=v").strip()
    if semver.Version.is_valid(cleaned):
        return cleaned
    return None


def is_valid_version(version: object) -> bool:
    """Check whether a value is a semver version (a ``v`` prefix is allowed)."""
    return isinstance(version, str) and clean_version(version) is not None


def check_valid(version: object) -> bool:
    """Assert that a value is a valid semver version.

    Raises:
        InvalidVersionError: If it is not
    """
    if not is_valid_version(version):
        raise InvalidVersionError(version)
    return True


def parse_version(version: str) -> semver.Version:
    """Parse a version string, accepting a ``v`` prefix.

    Raises:
        InvalidVersionError: If the version is not valid semver
    """
    cleaned = clean_version(version) if isinstance(version, str) else None
    if cleaned is None:
        raise InvalidVersionError(version)
    return semver.Version.parse(cleaned)


def increment_version(version: str, level: object) -> str:
    """Increment a version by a level.

    Lower components are reset. A pre-release is promoted to its release
    when the bump does not go past it (``1.0.0-rc.1`` + patch = ``1.0.0``).

    Args:
        version: Current version
        level: patch, minor or major

    Returns:
        The incremented version

    Raises:
        InvalidVersionError: If version is not valid semver
        InvalidIncrementLevelError: If level is not a valid level
    """
    current = parse_version(version)
    increment = _coerce_level(level)
    if increment is None:
        raise InvalidIncrementLevelError(level)

    major, minor, patch = current.major, current.minor, current.patch
    prerelease = current.prerelease is not None

    match increment:
        case IncrementLevel.MAJOR:
            if not (prerelease and minor == 0 and patch == 0):
                major += 1
            minor = patch = 0
        case IncrementLevel.MINOR:
            if not (prerelease and patch == 0):
                minor += 1
            patch = 0
        case IncrementLevel.PATCH:
            if not prerelease:
                patch += 1

    return str(semver.Version(major, minor, patch))


def get_greater_version(versions: Iterable[str]) -> str | None:
    """Get the greatest semver version.

    Args:
        versions: Version strings; invalid ones are ignored

    Returns:
        The greatest version as written (whitespace trimmed), or None
    """
    candidates = [version.strip() for version in versions if is_valid_version(version)]
    if not candidates:
        return None
    return max(candidates, key=parse_version)
