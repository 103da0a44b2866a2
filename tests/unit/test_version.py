"""Tests for increment levels and semver helpers."""

from __future__ import annotations

import itertools

import pytest

from versionist.core.version import (
    IncrementLevel,
    calculate_next_increment_level,
    check_valid,
    clean_version,
    get_greater_version,
    higher_level,
    increment_version,
    is_valid_increment_level,
    is_valid_version,
)
from versionist.exceptions import EmptyHistoryError, InvalidIncrementLevelError, InvalidVersionError


class TestIncrementLevel:
    """Tests for IncrementLevel and its helpers."""

    def test_precedence(self):
        """major > minor > patch."""
        assert IncrementLevel.PATCH.rank < IncrementLevel.MINOR.rank < IncrementLevel.MAJOR.rank

    @pytest.mark.parametrize("level", ["patch", "minor", "major"])
    def test_valid_levels(self, level):
        """The three semver levels are valid."""
        assert is_valid_increment_level(level)

    @pytest.mark.parametrize("level", ["Patch", "none", "", None, 1])
    def test_invalid_levels(self, level):
        """Anything else is not."""
        assert not is_valid_increment_level(level)

    def test_higher_level(self):
        """The higher of two levels wins; None is neutral."""
        assert higher_level("patch", "major") is IncrementLevel.MAJOR
        assert higher_level("minor", None) is IncrementLevel.MINOR
        assert higher_level(None, "patch") is IncrementLevel.PATCH
        assert higher_level(None, None) is None

    def test_higher_level_invalid(self):
        """Unknown levels are rejected."""
        with pytest.raises(InvalidIncrementLevelError, match="Invalid increment level: huge"):
            higher_level("huge", "patch")


class TestCalculateNextIncrementLevel:
    """Tests for calculate_next_increment_level()."""

    def test_highest_level_wins(self):
        """The result is the maximum over all commits."""
        commits = ["patch", "minor", "patch"]
        assert calculate_next_increment_level(commits, lambda commit: commit) is IncrementLevel.MINOR

    def test_order_does_not_matter(self):
        """Every permutation of the commits gives the same level."""
        commits = ["patch", None, "major", "minor"]
        results = {
            calculate_next_increment_level(list(order), lambda commit: commit)
            for order in itertools.permutations(commits)
        }
        assert results == {IncrementLevel.MAJOR}

    def test_no_level(self):
        """Commits without levels give None."""
        assert calculate_next_increment_level([None, None], lambda commit: commit) is None

    def test_empty_commits(self):
        """An empty history is an error."""
        with pytest.raises(EmptyHistoryError):
            calculate_next_increment_level([], lambda commit: commit)

    def test_invalid_level(self):
        """An unknown level from the classifier is an error."""
        with pytest.raises(InvalidIncrementLevelError):
            calculate_next_increment_level(["patch", "foo"], lambda commit: commit)


class TestVersions:
    """Tests for version validation and comparison."""

    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            ("  v1.0.0-rc.1 ", "1.0.0-rc.1"),
            ("1.2", None),
            ("latest", None),
        ],
    )
    def test_clean_version(self, version, expected):
        """Prefixes and whitespace are stripped from valid versions."""
        assert clean_version(version) == expected

    def test_is_valid_version(self):
        """Only semver strings are versions."""
        assert is_valid_version("v2.0.0")
        assert not is_valid_version("2.0")
        assert not is_valid_version(None)

    def test_check_valid(self):
        """check_valid() raises on invalid versions."""
        assert check_valid("1.0.0")
        with pytest.raises(InvalidVersionError, match="Invalid version: foo"):
            check_valid("foo")

    def test_get_greater_version(self):
        """The greatest version is returned as written."""
        assert get_greater_version(["0.1.0", "v1.10.0", "1.9.0", "1.10.0-rc.1"]) == "v1.10.0"

    def test_get_greater_version_empty(self):
        """No valid versions give None."""
        assert get_greater_version([]) is None
        assert get_greater_version(["not-a-version"]) is None


class TestIncrementVersion:
    """Tests for increment_version()."""

    @pytest.mark.parametrize(
        ("version", "level", "expected"),
        [
            ("1.2.3", "patch", "1.2.4"),
            ("1.2.3", "minor", "1.3.0"),
            ("1.2.3", "major", "2.0.0"),
            ("v0.0.1", "minor", "0.1.0"),
            ("1.0.0-rc.1", "patch", "1.0.0"),
            ("1.0.0-rc.1", "minor", "1.0.0"),
            ("1.0.0-rc.1", "major", "1.0.0"),
            ("1.1.0-beta", "major", "2.0.0"),
            ("1.1.1-beta", "minor", "1.2.0"),
        ],
    )
    def test_increment(self, version, level, expected):
        """Lower components reset; pre-releases are promoted."""
        assert increment_version(version, level) == expected

    @pytest.mark.parametrize("level", ["patch", "minor", "major"])
    def test_monotonic(self, level):
        """An increment always produces a greater version."""
        assert get_greater_version(["1.2.3", increment_version("1.2.3", level)]) != "1.2.3"

    def test_not_idempotent(self):
        """Incrementing twice gives a different version than once."""
        once = increment_version("1.2.3", "patch")
        assert increment_version(once, "patch") != once

    def test_invalid_version(self):
        """Invalid versions are rejected."""
        with pytest.raises(InvalidVersionError):
            increment_version("foo", "patch")

    def test_invalid_level(self):
        """Invalid levels are rejected."""
        with pytest.raises(InvalidIncrementLevelError):
            increment_version("1.0.0", "huge")
