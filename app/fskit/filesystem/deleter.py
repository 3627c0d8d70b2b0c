"""Recursive deletion of files, symlinks and directories.

Directories are emptied child by child before being removed. A
top-level directory deleted non-recursively is first renamed to a
random hidden sibling, so a half-deleted tree is never visible under
its original name.

Deletion is fail-fast: the first entry that cannot be removed raises
RemovalFailedError and the rest of the batch is left untouched.
Nothing is rolled back.
"""

import base64
import logging
import os
from collections.abc import Iterable

from fskit.filesystem.errors import RemovalFailedError
from fskit.filesystem.gateway import GuardedOperations
from fskit.filesystem.models import FilterKind, SortOrder
from fskit.filesystem.scanner import DirectoryScanner

logger = logging.getLogger(__name__)

# Prefix of the hidden sibling a directory is renamed to before removal
ASIDE_PREFIX = ".!!"

_ASIDE_RANDOM_BYTES = 3


class RecursiveDeleter:
    """Deletes paths, recursing into directories children-first.

    Args:
        operations: Guarded provider to delete through.
        scanner: Scanner used to enumerate directory children. Defaults
            to one sharing ``operations``.
    """

    def __init__(
        self,
        operations: GuardedOperations | None = None,
        scanner: DirectoryScanner | None = None,
    ) -> None:
        self._ops = operations if operations is not None else GuardedOperations()
        self._scanner = scanner if scanner is not None else DirectoryScanner(self._ops)

    def delete(
        self,
        paths: str | Iterable[str],
        recursive: bool = False,
        force: bool = True,
    ) -> None:
        """Delete each path in input order.

        Args:
            paths: A single path or an iterable of paths.
            recursive: If False, a directory target is renamed aside
                before its contents are removed. Children are always
                deleted recursively.
            force: If True, try to make unwritable targets writable first.

        Raises:
            RemovalFailedError: If an entry could not be removed.
        """
        targets = [paths] if isinstance(paths, str) else paths
        for path in targets:
            self._delete_single(path, recursive, force)

    def _delete_single(self, path: str, recursive: bool, force: bool) -> None:
        """Delete one path, dispatching on its type.

        Symlinks are checked before directories so a link to a
        directory is removed without touching its target.
        """
        is_link = self._ops.is_link(path)
        if not is_link and not self._ops.exists(path):
            logger.debug("Nothing to delete at %s", path)
            return

        # chmod on a link would change its target
        if force and not is_link and not self._ops.is_writable(path):
            self._relax_permissions(path)

        if is_link:
            self._delete_symlink(path)
        elif self._ops.is_dir(path):
            self._delete_directory(path, recursive, force)
        elif not self._ops.unlink(path):
            msg = f"Failed to remove file [{os.path.basename(path)}] at [{path}]"
            raise RemovalFailedError(msg, path)

    def _relax_permissions(self, path: str) -> None:
        """Best-effort chmod 0o777; a failure is only logged."""
        if not self._ops.chmod(path, 0o777):
            logger.warning("Could not make %s writable before deletion", path)

    def _delete_symlink(self, path: str) -> None:
        """Remove a symlink, falling back to rmdir for directory links."""
        removed = self._ops.unlink(path) or self._ops.remove_empty_directory(path)
        if not removed and (self._ops.is_link(path) or self._ops.exists(path)):
            msg = f"Failed to remove symlink [{path}]"
            raise RemovalFailedError(msg, path)

    def _delete_directory(self, path: str, recursive: bool, force: bool) -> None:
        """Remove a directory after deleting all of its children."""
        if not recursive:
            path = self._rename_aside(path)

        children = self._scanner.scan(path, SortOrder.ASCENDING, FilterKind.TOP_LEVEL_ONLY)
        if children:
            self.delete(children, recursive=True, force=force)

        if not self._ops.remove_empty_directory(path) and self._ops.exists(path):
            msg = f"Failed to remove directory [{path}]"
            raise RemovalFailedError(msg, path)

    def _rename_aside(self, path: str) -> str:
        """Move a directory to a random hidden sibling name.

        Returns:
            The new path, or the original one if the sibling name is
            taken or the rename fails.
        """
        suffix = base64.urlsafe_b64encode(self._ops.random_bytes(_ASIDE_RANDOM_BYTES)).decode()
        aside = os.path.join(os.path.dirname(os.path.normpath(path)), f"{ASIDE_PREFIX}{suffix}")

        if self._ops.exists(aside) or self._ops.is_link(aside):
            logger.debug("Sibling %s is taken, deleting %s in place", aside, path)
            return path

        if not self._ops.rename(path, aside):
            logger.warning("Could not rename %s aside, deleting in place", path)
            return path

        logger.debug("Renamed %s to %s before deletion", path, aside)
        return aside
