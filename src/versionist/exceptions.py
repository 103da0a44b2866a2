"""Exception hierarchy for versionist.

Every error raised on purpose by versionist derives from VersionistError,
so the CLI can report it as a single line and exit with status 1.
"""

from __future__ import annotations


class VersionistError(Exception):
    """Base class for all versionist errors."""


# =============================================================================
# Commit history
# =============================================================================


class InvalidCommitError(VersionistError):
    """A raw commit record is missing its subject or body."""


# =============================================================================
# Invalid values
# =============================================================================


class InvalidValueError(VersionistError):
    """A value has the wrong shape or is outside its allowed set."""


class InvalidIncrementLevelError(InvalidValueError):
    """An increment level is not one of patch, minor or major."""

    def __init__(self, level: object) -> None:
        self.level = level
        super().__init__(f"Invalid increment level: {level}")


class InvalidVersionError(InvalidValueError):
    """A version string is not valid semver."""

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f"Invalid version: {version}")


class InvalidOptionValueError(InvalidValueError):
    """A configuration value does not match its property descriptor."""

    def __init__(self, property_name: str, expected: str, actual: str, value: object) -> None:
        self.property_name = property_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid option value: {value!r}. "
            f"The `{property_name}` option expects a {expected}, "
            f"but instead got a {actual}."
        )


class InvalidPresetError(InvalidValueError):
    """A configuration value names a preset that is not registered."""

    def __init__(self, property_name: str, preset: str) -> None:
        self.property_name = property_name
        self.preset = preset
        super().__init__(f"Invalid preset: {property_name} -> {preset}")


# =============================================================================
# Configuration files
# =============================================================================


class ConfigError(VersionistError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""


class ConfigSyntaxError(ConfigError):
    """A configuration file could not be parsed."""


# =============================================================================
# Git
# =============================================================================


class GitError(VersionistError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ReferenceNotFoundError(GitError):
    """No git reference exists for the latest documented version."""


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(VersionistError):
    """The changelog entry could not be generated."""


class EmptyHistoryError(ChangelogError):
    """There are no commits to work with."""


class NoChangeTypeError(ChangelogError):
    """The computed version is already documented."""


# =============================================================================
# Project manifests
# =============================================================================


class ProjectError(VersionistError):
    """A project manifest could not be updated."""


class VersionNotFoundError(ProjectError):
    """No version field was found in a manifest."""
