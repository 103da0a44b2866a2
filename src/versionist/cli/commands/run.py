"""Implementation of the default command.

Generates the changelog entry of the next version and, unless this is a
dry run, writes it and updates the project manifests.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from versionist.config import load_config
from versionist.core.pipeline import ChangelogPipeline, PipelineResult
from versionist.exceptions import VersionistError
from versionist.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

ISSUES_HINT = "If you think this is a bug, please report it with the full output."


def create_pipeline(config_file: str | None, err_console: Console) -> ChangelogPipeline:
    """Load the configuration and build a pipeline for the current directory.

    Args:
        config_file: Optional configuration file
        err_console: Console for error output
    """
    project_path = Path.cwd()

    try:
        config = load_config(project_path, config_file=config_file)
    except VersionistError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    repo = GitRepository(config.path, config.git_directory)
    return ChangelogPipeline(config, repo)


def report_error(error: Exception, err_console: Console) -> None:
    """Print a failed run's error in red, with a hint."""
    err_console.print(f"[red]Error:[/] {escape(str(error))}")
    err_console.print(f"[dim]{ISSUES_HINT}[/]")


def execute_pipeline(
    pipeline: ChangelogPipeline,
    *,
    current: str | None,
    dry_run: bool,
    version: str | None,
    console: Console,
    err_console: Console,
) -> PipelineResult:
    """Run a pipeline and report its outcome.

    Raises:
        SystemExit: With status 1 if any stage fails
    """
    try:
        result = asyncio.run(pipeline.run(current=current, dry_run=dry_run, version=version))
    except VersionistError as e:
        report_error(e, err_console)
        raise SystemExit(1) from e

    if dry_run:
        console.print(result.entry, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print("Done")
    return result


def run_changelog(
    config_file: str | None,
    current: str | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the default command.

    Args:
        config_file: Optional configuration file
        current: Base version override
        dry_run: Whether to only print the entry
        console: Console for standard output
        err_console: Console for error output
    """
    pipeline = create_pipeline(config_file, err_console)
    execute_pipeline(
        pipeline,
        current=current,
        dry_run=dry_run,
        version=None,
        console=console,
        err_console=err_console,
    )
