"""Implementation of the 'set' command.

Releases an explicit version: the changelog entry is generated from the
commits as usual, but their change types do not decide the version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from versionist.cli.commands.run import create_pipeline, execute_pipeline

if TYPE_CHECKING:
    from rich.console import Console


def run_set(version: str, config_file: str | None, console: Console, err_console: Console) -> None:
    """Run the set command.

    Args:
        version: Version to release
        config_file: Optional configuration file
        console: Console for standard output
        err_console: Console for error output
    """
    pipeline = create_pipeline(config_file, err_console)
    execute_pipeline(
        pipeline,
        current=None,
        dry_run=False,
        version=version,
        console=console,
        err_console=err_console,
    )
