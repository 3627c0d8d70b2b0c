"""Filesystem scanning, deletion and bulk operations.

This module provides the primitive provider interface, the guarded
gateway in front of it, the recursive directory scanner, the safe
recursive deleter, and the Filesystem facade combining them.
"""

from fskit.filesystem.deleter import RecursiveDeleter
from fskit.filesystem.errors import (
    CopyFailedError,
    CreateFailedError,
    FilesystemError,
    FunctionUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    PathTooLongError,
    RemovalFailedError,
    RenameFailedError,
    TouchFailedError,
    WriteFailedError,
)
from fskit.filesystem.gateway import MAX_PATHLEN, GuardedOperations
from fskit.filesystem.models import Entry, FilterKind, Operation, ScanResult, ScanTree, SortOrder
from fskit.filesystem.operations import Filesystem
from fskit.filesystem.provider import FileOperations, LocalFileOperations
from fskit.filesystem.scanner import DirectoryScanner

__all__ = [
    "MAX_PATHLEN",
    "CopyFailedError",
    "CreateFailedError",
    "DirectoryScanner",
    "Entry",
    "FileOperations",
    "Filesystem",
    "FilesystemError",
    "FilterKind",
    "FunctionUnavailableError",
    "GuardedOperations",
    "InvalidArgumentError",
    "LocalFileOperations",
    "NotFoundError",
    "Operation",
    "PathTooLongError",
    "RecursiveDeleter",
    "RemovalFailedError",
    "RenameFailedError",
    "ScanResult",
    "ScanTree",
    "SortOrder",
    "TouchFailedError",
    "WriteFailedError",
]
