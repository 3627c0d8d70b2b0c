"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from fskit import __version__
from fskit.cli.commands import config, fs, scan
from fskit.core.config import ConfigError, load_config
from fskit.core.log import setup_logging
from fskit.utils.formatting import print_error

# Create main Typer app
app = typer.Typer(
    name="fskit",
    help="Scan directory trees and run bulk file operations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fskit version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """fskit - scan directory trees and run bulk file operations.

    Every operation reports failures explicitly; nothing fails silently.
    """
    try:
        settings = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if verbose:
        level: int | str = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = settings.log_level
    setup_logging(level)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = settings


# Register commands
app.command(name="scan")(scan.scan_directory)
app.add_typer(fs.app, name="fs")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
