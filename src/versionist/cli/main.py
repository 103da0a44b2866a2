"""Command line entry point."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from versionist import __version__
from versionist.cli.commands.get import run_get
from versionist.cli.commands.run import run_changelog
from versionist.cli.commands.set import run_set

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


config_option = click.option(
    "--config",
    "-c",
    "config_file",
    default=None,
    help="Configuration file, relative to the current directory.",
)


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--current", "-u", default=None, help="Version to increment, instead of the latest documented one.")
@click.option("--dry", "-d", is_flag=True, help="Print the changelog entry without writing anything.")
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs.")
@click.version_option(__version__, prog_name="versionist")
@click.pass_context
def cli(ctx: click.Context, current: str | None, dry: bool, config_file: str | None, verbose: bool) -> None:
    """Generate a changelog entry and bump the project version."""
    _setup_logging(verbose)
    ctx.obj = {"config_file": config_file}

    if ctx.invoked_subcommand is None:
        run_changelog(
            config_file=config_file,
            current=current,
            dry_run=dry,
            console=console,
            err_console=err_console,
        )


@cli.command("get")
@click.argument("target", type=click.Choice(["version", "reference"]))
@config_option
@click.pass_context
def get_command(ctx: click.Context, target: str, config_file: str | None) -> None:
    """Print the latest documented version or its git reference."""
    run_get(
        target=target,
        config_file=config_file or ctx.obj.get("config_file"),
        console=console,
        err_console=err_console,
    )


@cli.command("set")
@click.argument("version")
@config_option
@click.pass_context
def set_command(ctx: click.Context, version: str, config_file: str | None) -> None:
    """Release an explicit version, whatever the commits say."""
    run_set(
        version=version,
        config_file=config_file or ctx.obj.get("config_file"),
        console=console,
        err_console=err_console,
    )


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
