"""Utility modules for fskit.

This module exports the shared console helpers.
"""

from fskit.utils.formatting import (
    build_tree,
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "build_tree",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
