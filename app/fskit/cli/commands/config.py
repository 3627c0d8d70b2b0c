"""Configuration commands.

Shows the effective settings and writes a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from fskit.cli.types import get_config
from fskit.core.config import ConfigError, FskitConfig, save_config
from fskit.core.paths import get_config_path
from fskit.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or initialize the fskit configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    settings = get_config(ctx)
    path = get_config_path()

    table = Table(title="fskit Configuration", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not created, using defaults)"
    console.print(f"\n[dim]Config file: {source}[/dim]", soft_wrap=True)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_warning(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(FskitConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
