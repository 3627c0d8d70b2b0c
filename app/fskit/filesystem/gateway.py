"""Checked front for a primitive file-operations provider.

GuardedOperations mirrors the FileOperations interface and enforces two
rules before delegating: the primitive must be supported by the
provider, and any path handed to a predicate must fit within the
platform path-length ceiling.
"""

import os
from collections.abc import Callable
from typing import IO

from fskit.filesystem.errors import FunctionUnavailableError, PathTooLongError
from fskit.filesystem.models import Operation, SortOrder
from fskit.filesystem.provider import FileOperations, LocalFileOperations


def _platform_max_path() -> int:
    """Return the longest path the platform accepts."""
    if hasattr(os, "pathconf"):
        try:
            return os.pathconf("/", "PC_PATH_MAX")
        except (OSError, ValueError):
            return 4096
    return 260


MAX_PATHLEN: int = _platform_max_path() - 2


class GuardedOperations:
    """Capability- and length-checked access to a FileOperations provider.

    Args:
        provider: Provider to delegate to. Defaults to LocalFileOperations.
        max_path_length: Longest path accepted by the predicates.
    """

    def __init__(
        self,
        provider: FileOperations | None = None,
        max_path_length: int = MAX_PATHLEN,
    ) -> None:
        self._provider = provider if provider is not None else LocalFileOperations()
        self._max_path_length = max_path_length

    @property
    def provider(self) -> FileOperations:
        """The wrapped provider."""
        return self._provider

    def require(self, operation: Operation) -> None:
        """Fail fast when the provider lacks a primitive.

        Raises:
            FunctionUnavailableError: If the primitive is not supported.
        """
        if not self._provider.supports(operation):
            raise FunctionUnavailableError(operation.value)

    def check_length(self, path: str) -> None:
        """Reject paths longer than the configured ceiling.

        Raises:
            PathTooLongError: If ``path`` exceeds the ceiling.
        """
        if len(path) > self._max_path_length:
            msg = (
                f"Could not check [{path[:64]}...] because path length exceeds "
                f"[{self._max_path_length}] characters"
            )
            raise PathTooLongError(msg, path)

    def _predicate(self, operation: Operation, check: Callable[[str], bool], path: str) -> bool:
        self.check_length(path)
        self.require(operation)
        return check(path)

    # Predicates

    def exists(self, path: str) -> bool:
        return self._predicate(Operation.EXISTS, self._provider.exists, path)

    def is_dir(self, path: str) -> bool:
        return self._predicate(Operation.IS_DIR, self._provider.is_dir, path)

    def is_file(self, path: str) -> bool:
        return self._predicate(Operation.IS_FILE, self._provider.is_file, path)

    def is_link(self, path: str) -> bool:
        return self._predicate(Operation.IS_LINK, self._provider.is_link, path)

    def is_readable(self, path: str) -> bool:
        return self._predicate(Operation.IS_READABLE, self._provider.is_readable, path)

    def is_writable(self, path: str) -> bool:
        return self._predicate(Operation.IS_WRITABLE, self._provider.is_writable, path)

    def is_executable(self, path: str) -> bool:
        return self._predicate(Operation.IS_EXECUTABLE, self._provider.is_executable, path)

    # Delegated primitives

    def list_directory(self, path: str, order: SortOrder) -> list[str]:
        self.require(Operation.LIST_DIRECTORY)
        return self._provider.list_directory(path, order)

    def rename(self, source: str, target: str) -> bool:
        self.require(Operation.RENAME)
        return self._provider.rename(source, target)

    def unlink(self, path: str) -> bool:
        self.require(Operation.UNLINK)
        return self._provider.unlink(path)

    def remove_empty_directory(self, path: str) -> bool:
        self.require(Operation.REMOVE_EMPTY_DIRECTORY)
        return self._provider.remove_empty_directory(path)

    def chmod(self, path: str, mode: int) -> bool:
        self.require(Operation.CHMOD)
        return self._provider.chmod(path, mode)

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> bool:
        self.require(Operation.MKDIR)
        return self._provider.mkdir(path, mode, parents)

    def touch(self, path: str, mtime: float | None = None, atime: float | None = None) -> bool:
        self.require(Operation.TOUCH)
        return self._provider.touch(path, mtime, atime)

    def write(self, path: str, data: bytes, lock: bool = False) -> bool:
        self.require(Operation.WRITE)
        if lock:
            self.require(Operation.LOCK)
        return self._provider.write(path, data, lock)

    def open(self, path: str, mode: str) -> IO[bytes]:
        self.require(Operation.OPEN)
        return self._provider.open(path, mode)

    def file_size(self, path: str) -> int:
        self.require(Operation.FILE_SIZE)
        return self._provider.file_size(path)

    def file_mode(self, path: str) -> int:
        self.require(Operation.FILE_MODE)
        return self._provider.file_mode(path)

    def mtime(self, path: str) -> float:
        self.require(Operation.MTIME)
        return self._provider.mtime(path)

    def random_bytes(self, count: int) -> bytes:
        self.require(Operation.RANDOM_BYTES)
        return self._provider.random_bytes(count)
