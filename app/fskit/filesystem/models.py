"""Filesystem domain models for directory scanning.

This module defines the enums and data structures shared by the
scanner, the deleter and the primitive provider: filter kinds, sort
orders, symbolic primitive names, and the shapes of scan results.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class FilterKind(IntEnum):
    """Selection applied to entries during a scan.

    Attributes:
        ALL: Every entry is included.
        FILE_ONLY: Only regular files are included.
        DIR_ONLY: Only directories are included.
        TOP_LEVEL_ONLY: No recursion; immediate children only.
    """

    ALL = 0
    FILE_ONLY = 1
    DIR_ONLY = 2
    TOP_LEVEL_ONLY = 3


class SortOrder(IntEnum):
    """Order in which a directory level is listed.

    Attributes:
        ASCENDING: Alphabetical, ascending.
        DESCENDING: Alphabetical, descending.
        NONE: Whatever order the operating system returns.
    """

    ASCENDING = 0
    DESCENDING = 1
    NONE = 2


class Operation(str, Enum):
    """Symbolic names of the primitives a provider may support."""

    LIST_DIRECTORY = "list_directory"
    EXISTS = "exists"
    IS_DIR = "is_dir"
    IS_FILE = "is_file"
    IS_LINK = "is_link"
    IS_READABLE = "is_readable"
    IS_WRITABLE = "is_writable"
    IS_EXECUTABLE = "is_executable"
    RENAME = "rename"
    UNLINK = "unlink"
    REMOVE_EMPTY_DIRECTORY = "remove_empty_directory"
    CHMOD = "chmod"
    MKDIR = "mkdir"
    TOUCH = "touch"
    WRITE = "write"
    LOCK = "lock"
    OPEN = "open"
    FILE_SIZE = "file_size"
    FILE_MODE = "file_mode"
    MTIME = "mtime"
    RANDOM_BYTES = "random_bytes"


@dataclass(frozen=True, slots=True)
class Entry:
    """A named child of a directory being scanned.

    Attributes:
        name: Leaf name of the entry.
        full_path: Parent directory joined with the leaf name.
    """

    name: str
    full_path: str

    def __post_init__(self) -> None:
        """Reject self and parent references."""
        if self.name in ("", ".", ".."):
            msg = f"Invalid entry name: {self.name!r}"
            raise ValueError(msg)


# Nested name -> (None for leaves | sub-tree for directories)
ScanTree = dict[str, "ScanTree | None"]

ScanResult = list[str] | ScanTree
