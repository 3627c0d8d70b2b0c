"""Primitive file-operations provider.

This module defines the fixed interface through which the scanner, the
deleter and the Filesystem facade touch the disk, and the local
implementation backed by ``os``. Every primitive is a single method;
whether a primitive is usable on the running platform is reported by
``supports()`` rather than looked up by name at call time.

Mutating primitives return a bool instead of raising, so callers can
decide whether a failure is fatal. Listing and stat-style queries raise
the underlying OSError.
"""

import importlib.util
import logging
import os
import secrets
import stat
from typing import IO, Protocol, runtime_checkable

from fskit.filesystem.models import Operation, SortOrder

logger = logging.getLogger(__name__)

_DOT_ENTRIES: tuple[str, ...] = (".", "..")


@runtime_checkable
class FileOperations(Protocol):
    """Protocol for single-entry filesystem primitives.

    Implementations must not recurse; recursion lives in the scanner and
    the deleter.
    """

    def supports(self, operation: Operation) -> bool:
        """Check whether a primitive is available on this provider."""
        ...

    def list_directory(self, path: str, order: SortOrder) -> list[str]:
        """List the leaf names of a directory, including ``.`` and ``..``.

        Raises:
            OSError: If the directory cannot be listed.
        """
        ...

    def exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def is_link(self, path: str) -> bool: ...

    def is_readable(self, path: str) -> bool: ...

    def is_writable(self, path: str) -> bool: ...

    def is_executable(self, path: str) -> bool: ...

    def rename(self, source: str, target: str) -> bool: ...

    def unlink(self, path: str) -> bool: ...

    def remove_empty_directory(self, path: str) -> bool: ...

    def chmod(self, path: str, mode: int) -> bool: ...

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> bool: ...

    def touch(self, path: str, mtime: float | None = None, atime: float | None = None) -> bool: ...

    def write(self, path: str, data: bytes, lock: bool = False) -> bool: ...

    def open(self, path: str, mode: str) -> IO[bytes]:
        """Open a file in binary mode.

        Raises:
            OSError: If the file cannot be opened.
        """
        ...

    def file_size(self, path: str) -> int: ...

    def file_mode(self, path: str) -> int: ...

    def mtime(self, path: str) -> float: ...

    def random_bytes(self, count: int) -> bytes: ...


def _detect_capabilities() -> frozenset[Operation]:
    """Determine which primitives the running platform supports."""
    operations = set(Operation)
    if not hasattr(os, "chmod"):
        operations.discard(Operation.CHMOD)
    if importlib.util.find_spec("fcntl") is None:
        operations.discard(Operation.LOCK)
    return frozenset(operations)


def _sort_names(names: list[str], order: SortOrder) -> list[str]:
    if order == SortOrder.ASCENDING:
        return sorted(names)
    if order == SortOrder.DESCENDING:
        return sorted(names, reverse=True)
    return names


class LocalFileOperations:
    """Local-disk provider built on ``os`` and ``os.path``.

    Satisfies the FileOperations protocol structurally.

    Args:
        capabilities: Optional explicit capability set. Defaults to what
            the running platform supports.
    """

    def __init__(self, capabilities: frozenset[Operation] | None = None) -> None:
        self._capabilities = capabilities if capabilities is not None else _detect_capabilities()

    def supports(self, operation: Operation) -> bool:
        return operation in self._capabilities

    def list_directory(self, path: str, order: SortOrder) -> list[str]:
        return _sort_names([*_DOT_ENTRIES, *os.listdir(path)], SortOrder(order))

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_link(self, path: str) -> bool:
        return os.path.islink(path)

    def is_readable(self, path: str) -> bool:
        return os.access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK)

    def is_executable(self, path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def rename(self, source: str, target: str) -> bool:
        try:
            os.rename(source, target)
        except OSError as e:
            logger.debug("rename %s -> %s failed: %s", source, target, e)
            return False
        return True

    def unlink(self, path: str) -> bool:
        try:
            os.unlink(path)
        except OSError as e:
            logger.debug("unlink %s failed: %s", path, e)
            return False
        return True

    def remove_empty_directory(self, path: str) -> bool:
        try:
            os.rmdir(path)
        except OSError as e:
            logger.debug("rmdir %s failed: %s", path, e)
            return False
        return True

    def chmod(self, path: str, mode: int) -> bool:
        try:
            os.chmod(path, mode)
        except OSError as e:
            logger.debug("chmod %s to %o failed: %s", path, mode, e)
            return False
        return True

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> bool:
        try:
            if parents:
                os.makedirs(path, mode)
            else:
                os.mkdir(path, mode)
        except OSError as e:
            logger.debug("mkdir %s failed: %s", path, e)
            return False
        return True

    def touch(self, path: str, mtime: float | None = None, atime: float | None = None) -> bool:
        """Create the file if missing, then set its timestamps.

        When ``mtime`` is None both timestamps become the current time;
        ``atime`` defaults to ``mtime``.
        """
        try:
            with open(path, "ab"):
                pass
            times = None if mtime is None else (mtime if atime is None else atime, mtime)
            os.utime(path, times)
        except OSError as e:
            logger.debug("touch %s failed: %s", path, e)
            return False
        return True

    def write(self, path: str, data: bytes, lock: bool = False) -> bool:
        """Replace the file content, creating the file if missing.

        With ``lock`` the file is truncated only once the exclusive lock
        is held.
        """
        try:
            with open(path, "ab" if lock else "wb") as fh:
                if lock:
                    import fcntl

                    fcntl.flock(fh, fcntl.LOCK_EX)
                    fh.truncate(0)
                fh.write(data)
        except OSError as e:
            logger.debug("write %s failed: %s", path, e)
            return False
        return True

    def open(self, path: str, mode: str) -> IO[bytes]:
        return open(path, mode if "b" in mode else f"{mode}b")  # noqa: SIM115

    def file_size(self, path: str) -> int:
        return os.path.getsize(path)

    def file_mode(self, path: str) -> int:
        return stat.S_IMODE(os.stat(path).st_mode)

    def mtime(self, path: str) -> float:
        return os.path.getmtime(path)

    def random_bytes(self, count: int) -> bytes:
        return secrets.token_bytes(count)
