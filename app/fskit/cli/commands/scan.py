"""Scan command implementation.

Lists the contents of a directory tree, either as a filtered flat list
of paths or as a nested tree.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from fskit.cli.types import (
    FilterChoice,
    OrderChoice,
    OutputFormat,
    get_config,
    get_filesystem,
)
from fskit.filesystem.errors import FilesystemError
from fskit.utils.formatting import build_tree, console, print_error, print_info


def scan_directory(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to scan."),
    ],
    filter_choice: Annotated[
        FilterChoice,
        typer.Option(
            "--filter",
            "-F",
            help="Entries to list: all, files, dirs, or top (no recursion).",
            case_sensitive=False,
        ),
    ] = FilterChoice.ALL,
    tree: Annotated[
        bool,
        typer.Option(
            "--tree",
            "-t",
            help="Show a nested tree instead of a flat list.",
        ),
    ] = False,
    order: Annotated[
        OrderChoice | None,
        typer.Option(
            "--order",
            "-o",
            help="Listing order (defaults to the configured sort order).",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Scan a directory recursively and list its entries."""
    sort = order.order if order is not None else get_config(ctx).sort
    fs = get_filesystem()

    try:
        result = fs.scan(str(path), sort, filter_choice.kind, as_tree=tree)
    except (FilesystemError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result is None:
        print_error(f"Not a directory: {path}")
        raise typer.Exit(code=1)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result))
        return

    if isinstance(result, dict):
        console.print(build_tree(str(path), result))
        return

    if not result:
        print_info("No matching entries.")
        return

    for entry in result:
        typer.echo(entry)
    console.print(f"\n[dim]{len(result)} entries[/dim]")
