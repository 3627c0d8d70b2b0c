"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich: shared
consoles, status messages, human-readable sizes, and rendering of
scan trees.
"""

import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme
from rich.tree import Tree

from fskit.filesystem.models import ScanTree

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "bold #69B9A1",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "dir": "bold #0e8ac8",
        "file": "#ffffff",
        "dim": "#b2bec3",
    }
)


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def build_tree(root: str, tree: ScanTree) -> Tree:
    """Convert a scan tree into a Rich Tree for display.

    Directories are labelled with a trailing separator and listed in the
    order the scan produced them.

    Args:
        root: Path shown as the tree's root label.
        tree: Nested mapping returned by a tree scan.

    Returns:
        Rich Tree ready to print.
    """
    rich_tree = Tree(f"[dir]{escape(root)}[/]", guide_style="muted")
    _add_branch(rich_tree, tree)
    return rich_tree


def _add_branch(node: Tree, tree: ScanTree) -> None:
    for name, subtree in tree.items():
        if subtree is None:
            node.add(f"[file]{escape(name)}[/]")
        else:
            _add_branch(node.add(f"[dir]{escape(name)}{os.sep}[/]"), subtree)
