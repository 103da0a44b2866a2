"""Changelog and version orchestration.

A run goes through these stages, in order:

1. Read the versions documented in the changelog
2. Resolve the git reference of the latest documented version
3. Read the commit history since that reference
4. Pick the base version and calculate the next one
5. Render the changelog entry
6. Persist the entry and update the project manifests

Hooks from the configuration may be plain functions or coroutine
functions. Blocking work (git, file system) runs in worker threads.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from versionist.core.changelog import TemplateData, calculate_next_version, generate_changelog
from versionist.core.commits import Commit, parse_git_log_output
from versionist.core.version import check_valid, clean_version, get_greater_version
from versionist.exceptions import ChangelogError, NoChangeTypeError, ReferenceNotFoundError

if TYPE_CHECKING:
    from versionist.config.models import VersionistConfig
    from versionist.vcs.git import GitRepository

logger = logging.getLogger(__name__)


async def _call(hook: Callable[..., Any], *args: Any) -> Any:
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _call_blocking(hook: Callable[..., Any], *args: Any) -> Any:
    # Coroutine functions only build their coroutine in the thread
    result = await asyncio.to_thread(hook, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass
class PipelineResult:
    """Outcome of a pipeline run."""

    version: str
    entry: str
    data: TemplateData
    documented_versions: list[str] = field(default_factory=list)
    start_reference: str | None = None
    dry_run: bool = False


class ChangelogPipeline:
    """Generate a changelog entry and bump the version of a project.

    Args:
        config: Resolved configuration
        repo: Git repository to read history from
    """

    def __init__(self, config: VersionistConfig, repo: GitRepository) -> None:
        self.config = config
        self.repo = repo

    # =========================================================================
    # Stages
    # =========================================================================

    async def read_documented_versions(self) -> list[str]:
        """Versions documented in the changelog.

        Returns:
            The documented versions, or just the default initial version
            when the changelog documents none
        """
        versions = await _call_blocking(
            self.config.get_changelog_documented_versions,
            str(self.config.effective_changelog_path),
        )
        return list(versions or [])

    async def resolve_start_reference(self, documented_versions: list[str]) -> str | None:
        """Resolve the git reference history is read from.

        Args:
            documented_versions: Versions found in the changelog

        Returns:
            The reference of the latest documented version, or None to read
            history from the first commit

        Raises:
            ReferenceNotFoundError: If versions are documented but neither
                their reference nor a commit named after it exists
        """
        versions = documented_versions or [self.config.default_initial_version]
        reference = await _call(self.config.get_git_reference_from_version, get_greater_version(versions))

        if await asyncio.to_thread(self.repo.reference_exists, reference):
            return reference

        if not documented_versions:
            logger.debug("No documented versions and no %s reference, reading all history", reference)
            return None

        commit = await asyncio.to_thread(self.repo.find_commit_by_message, reference)
        if commit is None:
            raise ReferenceNotFoundError(f"Omitting {reference}. No valid git reference was found.")

        logger.warning("Reference %s was missing, tagging commit %s", reference, commit)
        await asyncio.to_thread(self.repo.create_tag, reference, commit)
        return reference

    async def read_history(self, start_reference: str | None) -> list[Commit]:
        """Read and structure the commits since start_reference."""
        output = await asyncio.to_thread(
            self.repo.read_history,
            start_reference,
            "HEAD",
            include_merge_commits=self.config.include_merge_commits,
        )
        history = parse_git_log_output(
            output,
            subject_parser=self.config.subject_parser,
            body_parser=self.config.body_parser,
            parse_footer_tags=self.config.parse_footer_tags,
            lower_case_footer_tags=self.config.lower_case_footer_tags,
        )
        logger.debug("Read %d commits since %s", len(history), start_reference or "the first commit")
        return history

    async def calculate_version(
        self,
        history: list[Commit],
        documented_versions: list[str],
        current: str | None = None,
    ) -> str:
        """Calculate the version being released.

        Raises:
            NoChangeTypeError: If the calculated version is already documented
        """
        versions = documented_versions or [self.config.default_initial_version]

        if current:
            base_version = current
        else:
            base_version = await _call(self.config.get_current_base_version, versions, history)

        version = calculate_next_version(
            history,
            current_version=base_version,
            get_increment_level_from_commit=self.config.get_increment_level_from_commit,
            increment_version=self.config.increment_version,
        )

        if version in versions:
            raise NoChangeTypeError("No commits were annotated with a change type")

        return version

    async def render_entry(self, history: list[Commit], version: str) -> tuple[str, TemplateData]:
        """Render the changelog entry of a version."""
        return await generate_changelog(
            history,
            template=self.config.template,
            version=version,
            date=datetime.now().astimezone(),
            include_commit_when=self.config.include_commit_when,
            transform_template_data=self.config.transform_template_data,
            transform_template_data_async=self.config.transform_template_data_async,
        )

    async def persist(self, version: str, entry: str, data: TemplateData) -> None:
        """Write the entry and update the project manifests, as configured."""
        if self.config.edit_changelog:
            await _call_blocking(self.config.add_entry_to_changelog, str(self.config.effective_changelog_path), entry)
            logger.info("Added %s to %s", version, self.config.effective_changelog_path)

            await _call_blocking(self.config.add_entry_to_history_file, str(self.config.effective_history_path), data)

        if self.config.edit_version:
            for update_version in self.config.version_updaters:
                await _call_blocking(update_version, self.config.path, version)
            logger.info("Updated project version to %s", version)

    # =========================================================================
    # Entry points
    # =========================================================================

    async def run(
        self,
        current: str | None = None,
        dry_run: bool = False,
        *,
        version: str | None = None,
    ) -> PipelineResult:
        """Run every stage.

        Args:
            current: Base version to increment, instead of the latest
                documented one
            dry_run: Render the entry without writing anything
            version: Release this exact version, ignoring commit change types

        Returns:
            The released version, its entry and template data

        Raises:
            VersionistError: From whichever stage fails
        """
        documented_versions = await self.read_documented_versions()
        start_reference = await self.resolve_start_reference(documented_versions)
        history = await self.read_history(start_reference)

        if version is not None:
            version = normalize_version(version)
            if version in documented_versions:
                raise ChangelogError(f"Version {version} is already documented")
        else:
            version = await self.calculate_version(history, documented_versions, current)

        entry, data = await self.render_entry(history, version)

        if dry_run:
            logger.debug("Dry run, not writing %s", version)
        else:
            await self.persist(version, entry, data)

        return PipelineResult(
            version=version,
            entry=entry,
            data=data,
            documented_versions=documented_versions,
            start_reference=start_reference,
            dry_run=dry_run,
        )

    async def get_documented_version(self) -> str:
        """Latest documented version, or the default initial version."""
        versions = await self.read_documented_versions()
        return get_greater_version(versions or [self.config.default_initial_version])

    async def get_reference(self) -> str:
        """Git reference of the latest documented version."""
        version = await self.get_documented_version()
        return await _call(self.config.get_git_reference_from_version, version)


def normalize_version(version: str) -> str:
    """Normalize a user-supplied version such as ``v1.2.3``.

    Raises:
        InvalidVersionError: If the version is not valid semver
    """
    check_valid(version)
    return clean_version(version)
