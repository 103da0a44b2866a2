"""Implementation of the 'get' command."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from versionist.cli.commands.run import create_pipeline, report_error
from versionist.exceptions import VersionistError

if TYPE_CHECKING:
    from rich.console import Console


def run_get(target: str, config_file: str | None, console: Console, err_console: Console) -> None:
    """Print the latest documented version or its git reference.

    Args:
        target: ``version`` or ``reference``
        config_file: Optional configuration file
        console: Console for standard output
        err_console: Console for error output
    """
    pipeline = create_pipeline(config_file, err_console)

    query = pipeline.get_reference if target == "reference" else pipeline.get_documented_version

    try:
        value = asyncio.run(query())
    except VersionistError as e:
        report_error(e, err_console)
        raise SystemExit(1) from e

    console.print(value, markup=False, highlight=False, soft_wrap=True)
