"""Next version calculation and changelog entry generation.

Templates are rendered with Jinja2. The template receives the filtered
and transformed commits, the new version and the release date.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import jinja2

from versionist.core.commits import Commit
from versionist.core.version import calculate_next_increment_level, check_valid
from versionist.exceptions import ChangelogError, EmptyHistoryError


@dataclass
class TemplateData:
    """Data handed to the changelog template and the history file."""

    commits: list[Any]
    version: str
    date: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data for YAML serialization."""
        return {
            "commits": [_plain(commit) for commit in self.commits],
            "version": self.version,
            "date": self.date,
        }


def _plain(commit: Any) -> Any:
    if isinstance(commit, Commit):
        data = {
            "subject": commit.subject,
            "body": commit.body,
            "footer": dict(commit.footer),
            "hash": commit.hash,
            "author": commit.author,
        }
        if commit.nested:
            data["nested"] = commit.nested
        return {key: value for key, value in data.items() if value is not None}
    return commit


def calculate_next_version(
    commits: list[Commit],
    *,
    current_version: str,
    get_increment_level_from_commit: Callable[[Commit], object],
    increment_version: Callable[[str, str], str],
) -> str:
    """Calculate the next version from a list of commits.

    Args:
        commits: Commits since the last release
        current_version: Version to increment
        get_increment_level_from_commit: Classifies one commit
        increment_version: Applies an increment level to a version

    Returns:
        The incremented version, or current_version when no commit
        asks for a bump

    Raises:
        ValueError: If current_version is empty
        EmptyHistoryError: If there are no commits
    """
    if not current_version:
        raise ValueError("Missing the current_version option")

    level = calculate_next_increment_level(commits, get_increment_level_from_commit)
    if level is None:
        return current_version

    return increment_version(current_version, str(level))


# =============================================================================
# Rendering
# =============================================================================


def format_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    """Jinja filter formatting a date, datetime or ISO-8601 string."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if hasattr(value, "strftime"):
        return value.strftime(fmt)
    return str(value)


def create_environment() -> jinja2.Environment:
    """Create the Jinja2 environment used for changelog templates."""
    environment = jinja2.Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    environment.filters["format_date"] = format_date
    return environment


def render_template(template: str, data: TemplateData) -> str:
    """Render a changelog template.

    Args:
        template: Jinja2 template source
        data: Template data

    Returns:
        The rendered changelog entry

    Raises:
        ChangelogError: If the template cannot be parsed or rendered
    """
    try:
        compiled = create_environment().from_string(template)
        return compiled.render(commits=data.commits, version=data.version, date=data.date)
    except jinja2.TemplateError as e:
        raise ChangelogError(f"Could not render the changelog template: {e}") from e


async def _passthrough(data: TemplateData) -> TemplateData:
    return data


def _always(commit: Commit) -> bool:
    return True


def _identity(data: TemplateData) -> TemplateData:
    return data


async def generate_changelog(
    commits: list[Commit],
    *,
    template: str,
    version: str,
    date: datetime | None = None,
    include_commit_when: Callable[[Commit], Any] = _always,
    transform_template_data: Callable[[TemplateData], TemplateData] = _identity,
    transform_template_data_async: Callable[[TemplateData], Awaitable[TemplateData] | TemplateData] = _passthrough,
) -> tuple[str, TemplateData]:
    """Generate a changelog entry.

    Commits are filtered with include_commit_when, then the template data
    goes through transform_template_data and transform_template_data_async,
    in that order, before rendering.

    Args:
        commits: Commits of the release
        template: Jinja2 template source
        version: Version being released
        date: Release date, defaults to now (UTC)
        include_commit_when: Predicate selecting commits for the entry
        transform_template_data: Synchronous data transform
        transform_template_data_async: Asynchronous data transform

    Returns:
        Tuple of (rendered entry, final template data)

    Raises:
        EmptyHistoryError: If there are no commits
        ValueError: If the template or version is missing
        InvalidVersionError: If the version is not valid semver
    """
    if not commits:
        raise EmptyHistoryError("No commits to generate the CHANGELOG from")

    if not template:
        raise ValueError("Missing the template option")

    if not version:
        raise ValueError("Missing the version option")

    if date is None:
        date = datetime.now(UTC)

    check_valid(version)

    data = transform_template_data(
        TemplateData(
            commits=[commit for commit in commits if include_commit_when(commit)],
            version=version,
            date=date,
        )
    )

    transformed = transform_template_data_async(data)
    if inspect.isawaitable(transformed):
        transformed = await transformed

    return render_template(template, transformed), transformed
