"""Filesystem facade with bulk operations and predicates.

Filesystem bundles the guarded provider, the scanner and the deleter
behind one object. Operations that accept several paths take either a
single string or an iterable of strings; predicates are true only when
they hold for every given path.

All failures are raised as FilesystemError subclasses naming the
offending path(s).
"""

import logging
import os
from collections.abc import Iterable

from fskit.filesystem.deleter import RecursiveDeleter
from fskit.filesystem.errors import (
    CopyFailedError,
    CreateFailedError,
    InvalidArgumentError,
    NotFoundError,
    RenameFailedError,
    TouchFailedError,
    WriteFailedError,
)
from fskit.filesystem.gateway import GuardedOperations
from fskit.filesystem.models import FilterKind, Operation, ScanResult, SortOrder
from fskit.filesystem.provider import FileOperations
from fskit.filesystem.scanner import DirectoryScanner, total_file_size

logger = logging.getLogger(__name__)

_COPY_CHUNK_SIZE = 64 * 1024
_EXECUTE_BITS = 0o111


def _as_list(paths: str | Iterable[str]) -> list[str]:
    """Normalize a single path or an iterable of paths into a list."""
    if isinstance(paths, str):
        return [paths]
    return list(paths)


class Filesystem:
    """High-level filesystem operations with uniform error signaling.

    Args:
        provider: Primitive provider to operate on. Defaults to the
            local disk.
        operations: Pre-built guarded provider. Takes precedence over
            ``provider`` when given.

    Example:
        >>> fs = Filesystem()
        >>> fs.mkdir("/tmp/demo/sub")
        >>> fs.put("/tmp/demo/sub/a.txt", "hello")
        >>> fs.scan("/tmp/demo", as_tree=True)
        {'sub': {'a.txt': None}}
    """

    def __init__(
        self,
        provider: FileOperations | None = None,
        operations: GuardedOperations | None = None,
    ) -> None:
        self._ops = operations if operations is not None else GuardedOperations(provider)
        self._scanner = DirectoryScanner(self._ops)
        self._deleter = RecursiveDeleter(self._ops, self._scanner)

    @property
    def operations(self) -> GuardedOperations:
        """Guarded provider shared by every operation."""
        return self._ops

    # =========================================================================
    # Predicates
    # =========================================================================

    def exists(self, files: str | Iterable[str]) -> bool:
        """Check that every path exists (dangling symlinks do not)."""
        return all(self._ops.exists(f) for f in _as_list(files))

    def is_dir(self, files: str | Iterable[str]) -> bool:
        """Check that every path is a directory."""
        return all(self._ops.is_dir(f) for f in _as_list(files))

    def is_file(self, files: str | Iterable[str]) -> bool:
        """Check that every path is a regular file."""
        return all(self._ops.is_file(f) for f in _as_list(files))

    def is_link(self, files: str | Iterable[str]) -> bool:
        """Check that every path is a symbolic link."""
        return all(self._ops.is_link(f) for f in _as_list(files))

    def is_readable(self, files: str | Iterable[str]) -> bool:
        """Check that every path is readable."""
        return all(self._ops.is_readable(f) for f in _as_list(files))

    def is_writable(self, files: str | Iterable[str]) -> bool:
        """Check that every path is writable."""
        return all(self._ops.is_writable(f) for f in _as_list(files))

    def is_executable(self, files: str | Iterable[str]) -> bool:
        """Check that every path is an executable file."""
        return all(self._ops.is_executable(f) for f in _as_list(files))

    def has_dir(self, files: str | Iterable[str]) -> bool:
        """Check that at least one path is given and every path is a directory."""
        paths = _as_list(files)
        return bool(paths) and self.is_dir(paths)

    def is_empty_dir(self, directory: str) -> bool:
        """Check whether a path has no children.

        Anything that is not a directory counts as empty.
        """
        names = self._scanner.scandir(directory, exclude_dots=True)
        return not names

    # =========================================================================
    # Scanning and sizes
    # =========================================================================

    def scandir(
        self,
        directory: str,
        exclude_dots: bool = False,
        order: SortOrder | int | None = SortOrder.ASCENDING,
    ) -> list[str] | None:
        """List one directory level. See DirectoryScanner.scandir."""
        return self._scanner.scandir(directory, exclude_dots, order)

    def scan(
        self,
        directory: str,
        order: SortOrder | int | None = SortOrder.ASCENDING,
        filter_kind: FilterKind | int = FilterKind.ALL,
        as_tree: bool = True,
    ) -> ScanResult | None:
        """Scan a directory subtree. See DirectoryScanner.scan."""
        return self._scanner.scan(directory, order, filter_kind, as_tree)

    def dirsize(self, directory: str) -> int:
        """Total size in bytes of every file below ``directory``."""
        return self._scanner.directory_size(directory)

    def filesize(self, files: str | Iterable[str]) -> int:
        """Total size in bytes of the given files.

        Raises:
            NotFoundError: If any path is not a regular file.
        """
        return total_file_size(self._ops, _as_list(files))

    # =========================================================================
    # Creation
    # =========================================================================

    def mkdir(self, dirs: str | Iterable[str], mode: int = 0o777) -> None:
        """Create directories, including missing parents.

        Existing directories are skipped.

        Raises:
            CreateFailedError: If a directory could not be created.
        """
        for directory in _as_list(dirs):
            if self._ops.is_dir(directory):
                continue

            if not self._ops.mkdir(directory, mode, parents=True) and not self._ops.is_dir(
                directory
            ):
                msg = (
                    f"Failed to create directory [{os.path.basename(os.path.normpath(directory))}]"
                    f" at [{directory}]"
                )
                raise CreateFailedError(msg, directory)

    def touch(
        self,
        files: str | Iterable[str],
        mtime: float | None = None,
        atime: float | None = None,
    ) -> None:
        """Create files or update their timestamps.

        Args:
            files: Paths to touch.
            mtime: Modification time to set. Defaults to now.
            atime: Access time to set. Defaults to ``mtime``.

        Raises:
            TouchFailedError: If a file could not be touched.
        """
        for file in _as_list(files):
            if not self._ops.touch(file, mtime, atime):
                msg = f"Failed to touch file [{os.path.basename(file)}] at [{file}]"
                raise TouchFailedError(msg, file)

    def create(self, files: str | Iterable[str]) -> None:
        """Create empty files, making their parent directories first."""
        for file in _as_list(files):
            parent = os.path.dirname(file)
            if parent and not self._ops.is_dir(parent):
                self.mkdir(parent)
            self.touch(file)

    def put(self, filename: str, content: str | bytes, lock: bool = False) -> None:
        """Write content to a file, creating its parent directory.

        Args:
            filename: Destination file.
            content: Text (UTF-8 encoded) or bytes to write.
            lock: If True, hold an exclusive lock while writing.

        Raises:
            WriteFailedError: If the content could not be written.
        """
        parent = os.path.dirname(filename)
        if parent and not self._ops.is_dir(parent):
            self.mkdir(parent)

        data = content.encode() if isinstance(content, str) else content
        if not self._ops.write(filename, data, lock):
            msg = f"Failed to write file [{os.path.basename(filename)}] at [{filename}]"
            raise WriteFailedError(msg, filename)

    # =========================================================================
    # Moving and copying
    # =========================================================================

    def rename(self, source: str, target: str, overwrite: bool = False) -> None:
        """Rename a file or directory.

        Raises:
            RenameFailedError: If ``target`` exists and ``overwrite`` is
                False, or the rename itself fails.
        """
        if not overwrite and self._ops.exists(target):
            msg = f"Cannot rename because target [{target}] already exists"
            raise RenameFailedError(msg, source, target)

        if not self._ops.rename(source, target):
            msg = f"Failed to rename [{source}] to [{target}]"
            raise RenameFailedError(msg, source, target)

    def move(self, source: str, target_dir: str, overwrite: bool = False) -> None:
        """Move a file or directory into another directory.

        Raises:
            InvalidArgumentError: If ``target_dir`` is not a directory.
            RenameFailedError: If the move fails.
        """
        if not self._ops.is_dir(target_dir):
            msg = f"Cannot move [{source}] because [{target_dir}] is not a directory"
            raise InvalidArgumentError(msg, source, target_dir)

        name = os.path.basename(os.path.normpath(source))
        self.rename(source, os.path.join(target_dir, name), overwrite)

    def copy(self, source: str, target: str, overwrite: bool = False) -> None:
        """Copy a file, preserving its mtime and execute bits.

        When ``overwrite`` is False and ``target`` already exists, the
        copy only happens if ``source`` is newer.

        Raises:
            NotFoundError: If ``source`` is not a file.
            CopyFailedError: If ``target`` is ``source`` itself, a file
                cannot be opened, the target is missing afterwards, or
                not every byte was copied.
        """
        if not self._ops.is_file(source):
            msg = f"File not found [{os.path.basename(source)}] at path [{source}]"
            raise NotFoundError(msg, source)

        parent = os.path.dirname(target)
        if parent:
            self.mkdir(parent)

        if self._ops.exists(target) and os.path.samefile(source, target):
            msg = f"Cannot copy [{source}] onto itself [{target}]"
            raise CopyFailedError(msg, source, target)

        if not overwrite and self._ops.is_file(target):
            if self._ops.mtime(source) <= self._ops.mtime(target):
                logger.debug("Skipping copy of %s, %s is up to date", source, target)
                return

        copied = self._copy_bytes(source, target)

        if not self._ops.is_file(target):
            msg = f"Failed to copy file [{source}] to [{target}]"
            raise CopyFailedError(msg, source, target)

        source_mode = self._ops.file_mode(source)
        target_mode = self._ops.file_mode(target)
        if not self._ops.chmod(target, target_mode | (source_mode & _EXECUTE_BITS)):
            logger.warning("Could not copy execute bits of %s to %s", source, target)
        self.touch(target, self._ops.mtime(source))

        expected = self._ops.file_size(source)
        if copied != expected:
            msg = (
                f"Failed to copy the whole content of [{source}] to [{target}] "
                f"({copied} of {expected} bytes copied)"
            )
            raise CopyFailedError(msg, source, target)

    def _copy_bytes(self, source: str, target: str) -> int:
        """Stream ``source`` into ``target`` and return the bytes copied."""
        try:
            src_handle = self._ops.open(source, "rb")
        except OSError as e:
            msg = f"Failed to copy [{source}] to [{target}]: source could not be opened"
            raise CopyFailedError(msg, source, target) from e

        copied = 0
        with src_handle as src:
            try:
                dst_handle = self._ops.open(target, "wb")
            except OSError as e:
                msg = f"Failed to copy [{source}] to [{target}]: target could not be opened"
                raise CopyFailedError(msg, source, target) from e
            with dst_handle as dst:
                while chunk := src.read(_COPY_CHUNK_SIZE):
                    copied += dst.write(chunk)
        return copied

    # =========================================================================
    # Removal
    # =========================================================================

    def delete(
        self,
        files: str | Iterable[str],
        recursive: bool = False,
        force: bool = True,
    ) -> None:
        """Delete files, symlinks and directories. See RecursiveDeleter."""
        self._deleter.delete(_as_list(files), recursive, force)

    def remove(self, files: str | Iterable[str]) -> None:
        """Delete paths, renaming directories aside first."""
        self.delete(files, recursive=False)

    def empty(self, files: str | Iterable[str]) -> None:
        """Truncate files and clear directories without removing them."""
        for file in _as_list(files):
            if self._ops.is_file(file):
                self.put(file, b"", lock=self._ops.provider.supports(Operation.LOCK))
                continue

            children = self._scanner.scan(file, SortOrder.ASCENDING, FilterKind.TOP_LEVEL_ONLY)
            if children:
                self.remove(children)
