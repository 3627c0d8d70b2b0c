"""CLI commands for fskit.

This package contains all subcommand implementations.
"""

from fskit.cli.commands import config, fs, scan

__all__ = ["config", "fs", "scan"]
