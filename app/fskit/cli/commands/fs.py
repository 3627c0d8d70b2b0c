"""Bulk file operation commands.

Provides size computation, deletion, and the create/copy/move/empty
operations of the Filesystem facade as ``fskit fs`` subcommands.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from fskit.cli.types import get_config, get_filesystem
from fskit.filesystem.errors import FilesystemError
from fskit.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Bulk file operations.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _fail(error: Exception) -> typer.Exit:
    """Report an operation failure and build the exit to raise."""
    print_error(str(error))
    return typer.Exit(code=1)


@app.command()
def size(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to measure."),
    ],
) -> None:
    """Show the size of files and directories."""
    fs = get_filesystem()

    table = Table(title="Sizes", show_lines=False)
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Size", justify="right", width=12)

    total = 0
    try:
        for path in paths:
            target = str(path)
            size_bytes = fs.dirsize(target) if fs.is_dir(target) else fs.filesize(target)
            total += size_bytes
            table.add_row(escape(target), format_size(size_bytes))
    except FilesystemError as e:
        raise _fail(e) from e

    console.print(table)
    console.print(f"\n[dim]Total: {format_size(total)} ({total} bytes)[/dim]")


@app.command()
def rm(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to delete."),
    ],
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive",
            "-r",
            help="Delete directories in place, without renaming them aside first.",
        ),
    ] = False,
    force: Annotated[
        bool | None,
        typer.Option(
            "--force/--no-force",
            help="Make unwritable entries writable before deleting them.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete files, symlinks and directories (recursively)."""
    fs = get_filesystem()
    targets = [str(p) for p in paths]

    # Missing paths are a no-op for the deleter; report them up front
    try:
        existing = [t for t in targets if fs.is_link(t) or fs.exists(t)]
    except FilesystemError as e:
        raise _fail(e) from e
    for missing in sorted(set(targets) - set(existing)):
        print_info(f"Nothing to delete at {missing}")

    if not existing:
        return

    _print_deletion_plan(existing, dry_run)
    if dry_run:
        print_info(f"Dry-run: {len(existing)} path(s) would be deleted.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {len(existing)} path(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    use_force = force if force is not None else get_config(ctx).force
    try:
        fs.delete(existing, recursive=recursive, force=use_force)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Deleted {len(existing)} path(s).")


@app.command()
def touch(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files to create or update."),
    ],
    parents: Annotated[
        bool,
        typer.Option("--parents", "-p", help="Create missing parent directories."),
    ] = False,
) -> None:
    """Create files or update their timestamps."""
    fs = get_filesystem()
    targets = [str(p) for p in paths]

    try:
        if parents:
            fs.create(targets)
        else:
            fs.touch(targets)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Touched {len(targets)} file(s).")


@app.command()
def mkdir(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Directories to create."),
    ],
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Permission bits in octal."),
    ] = "777",
) -> None:
    """Create directories, including missing parents."""
    try:
        perms = int(mode, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {mode}", param_hint="--mode") from e

    fs = get_filesystem()
    try:
        fs.mkdir([str(p) for p in paths], perms)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Created {len(paths)} directory(ies).")


@app.command()
def cp(
    source: Annotated[Path, typer.Argument(help="File to copy.")],
    target: Annotated[Path, typer.Argument(help="Destination file.")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Copy even if the target is newer."),
    ] = False,
) -> None:
    """Copy a file, keeping its modification time."""
    fs = get_filesystem()
    try:
        fs.copy(str(source), str(target), overwrite)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Copied {source} to {target}")


@app.command()
def mv(
    source: Annotated[Path, typer.Argument(help="File or directory to move.")],
    target_dir: Annotated[Path, typer.Argument(help="Destination directory.")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace an existing entry of the same name."),
    ] = False,
) -> None:
    """Move a file or directory into another directory."""
    fs = get_filesystem()
    try:
        fs.move(str(source), str(target_dir), overwrite)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Moved {source} into {target_dir}")


@app.command()
def empty(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files to truncate or directories to clear."),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Truncate files and remove everything inside directories."""
    targets = [str(p) for p in paths]
    if not yes:
        confirmed = typer.confirm(
            f"Empty {len(targets)} path(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    fs = get_filesystem()
    try:
        fs.empty(targets)
    except FilesystemError as e:
        raise _fail(e) from e

    print_success(f"Emptied {len(targets)} path(s).")


# === Private helper functions ===


def _print_deletion_plan(paths: list[str], dry_run: bool) -> None:
    """Display planned deletions."""
    label = "Planned Deletions (dry-run)" if dry_run else "Planned Deletions"
    table = Table(title=label, show_lines=False)
    table.add_column("Path", style="bold", overflow="fold")

    for path in paths:
        table.add_row(escape(path))

    console.print(table)
