"""Shared types and helpers for CLI commands.

This module provides the option enums and the accessors for state the
main callback stores on the Typer context.
"""

from enum import Enum

import typer

from fskit.core.config import FskitConfig
from fskit.filesystem.models import FilterKind, SortOrder
from fskit.filesystem.operations import Filesystem


class FilterChoice(str, Enum):
    """Entry selection for scan output."""

    ALL = "all"
    FILES = "files"
    DIRS = "dirs"
    TOP = "top"

    @property
    def kind(self) -> FilterKind:
        """The FilterKind this choice selects."""
        return {
            FilterChoice.ALL: FilterKind.ALL,
            FilterChoice.FILES: FilterKind.FILE_ONLY,
            FilterChoice.DIRS: FilterKind.DIR_ONLY,
            FilterChoice.TOP: FilterKind.TOP_LEVEL_ONLY,
        }[self]


class OrderChoice(str, Enum):
    """Listing order for scan output."""

    ASC = "asc"
    DESC = "desc"
    NONE = "none"

    @property
    def order(self) -> SortOrder:
        """The SortOrder this choice selects."""
        return {
            OrderChoice.ASC: SortOrder.ASCENDING,
            OrderChoice.DESC: SortOrder.DESCENDING,
            OrderChoice.NONE: SortOrder.NONE,
        }[self]


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


def get_config(ctx: typer.Context) -> FskitConfig:
    """Return the configuration loaded by the main callback.

    Falls back to defaults when a command runs without the callback,
    e.g. when invoked directly in tests.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get("config"), FskitConfig):
        return obj["config"]
    return FskitConfig()


def get_filesystem() -> Filesystem:
    """Create the Filesystem the commands operate on."""
    return Filesystem()
