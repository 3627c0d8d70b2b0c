"""Recursive directory scanner.

Walks a directory subtree and produces either a flat, filtered list of
full paths or a nested tree mirroring the directory structure. Every
disk access goes through GuardedOperations, so capability and
path-length checks apply at each level of the walk.

Flat scans are post-order: a directory's own path is tested against
the filter, and appended, only after all of its descendants have been
processed.
"""

import logging
import os
from collections.abc import Callable, Iterable

from fskit.filesystem.errors import InvalidArgumentError, NotFoundError
from fskit.filesystem.gateway import GuardedOperations
from fskit.filesystem.models import Entry, FilterKind, ScanResult, ScanTree, SortOrder

logger = logging.getLogger(__name__)

_DOT_ENTRIES: frozenset[str] = frozenset((".", ".."))


def parse_filter(value: FilterKind | int) -> FilterKind:
    """Convert a filter code into a FilterKind.

    Args:
        value: FilterKind member or its integer code.

    Returns:
        The matching FilterKind.

    Raises:
        InvalidArgumentError: If the code is outside the known range.
    """
    try:
        return FilterKind(value)
    except ValueError:
        msg = f"Cannot scan directory: invalid filter value [{value}]"
        raise InvalidArgumentError(msg) from None


def parse_order(value: SortOrder | int | None) -> SortOrder:
    """Convert a sort code into a SortOrder; None means unordered.

    Raises:
        InvalidArgumentError: If the code is outside the known range.
    """
    if value is None:
        return SortOrder.NONE
    try:
        return SortOrder(value)
    except ValueError:
        msg = f"Cannot scan directory: invalid sort order [{value}]"
        raise InvalidArgumentError(msg) from None


def total_file_size(operations: GuardedOperations, files: Iterable[str]) -> int:
    """Sum the sizes of the given files.

    Args:
        operations: Guarded provider used for the checks and size queries.
        files: Paths that must all be regular files.

    Returns:
        Total size in bytes.

    Raises:
        NotFoundError: If any path is not a file, including files that
            disappeared after they were enumerated.
    """
    paths = list(files)
    for path in paths:
        if not operations.is_file(path):
            msg = f"File not found [{os.path.basename(path)}] at path [{path}]"
            raise NotFoundError(msg, path)

    total = 0
    for path in paths:
        try:
            total += operations.file_size(path)
        except FileNotFoundError as e:
            msg = f"File vanished before its size could be read [{path}]"
            raise NotFoundError(msg, path) from e
    return total


class DirectoryScanner:
    """Scans directory trees into flat path lists or nested mappings.

    Args:
        operations: Guarded provider to scan through. Defaults to one
            wrapping the local disk.
    """

    def __init__(self, operations: GuardedOperations | None = None) -> None:
        self._ops = operations if operations is not None else GuardedOperations()

    def scandir(
        self,
        directory: str,
        exclude_dots: bool = False,
        order: SortOrder | int | None = SortOrder.ASCENDING,
    ) -> list[str] | None:
        """List a single directory level.

        Args:
            directory: Directory to list.
            exclude_dots: If True, drop the ``.`` and ``..`` entries.
            order: Sort order forwarded to the provider; None lists unordered.

        Returns:
            Leaf names, or None if ``directory`` is not a directory.
        """
        if not self._ops.is_dir(directory):
            return None

        names = self._ops.list_directory(directory, parse_order(order))
        if exclude_dots:
            names = [name for name in names if name not in _DOT_ENTRIES]
        return names

    def scan(
        self,
        directory: str,
        order: SortOrder | int | None = SortOrder.ASCENDING,
        filter_kind: FilterKind | int = FilterKind.ALL,
        as_tree: bool = True,
    ) -> ScanResult | None:
        """Scan a directory subtree.

        Args:
            directory: Root of the scan. Never included in the result.
            order: Sort order applied when listing every level; None
                lists unordered.
            filter_kind: Which entries a flat scan keeps. TOP_LEVEL_ONLY
                lists the immediate children without recursing.
            as_tree: If True, return a nested mapping instead of a flat
                list. The filter does not apply to trees.

        Returns:
            Flat list of full paths or a ScanTree; None if ``directory``
            is not an existing directory.

        Raises:
            InvalidArgumentError: If ``filter_kind`` or ``order`` is out
                of range.
            OSError: If a directory cannot be listed mid-traversal.
        """
        if not self._ops.is_dir(directory):
            logger.debug("Nothing to scan at %s", directory)
            return None

        kind = parse_filter(filter_kind)
        sort = parse_order(order)

        if kind == FilterKind.TOP_LEVEL_ONLY:
            return [entry.full_path for entry in self._entries(directory, sort)]

        if as_tree:
            return self._build_tree(directory, sort)

        output: list[str] = []
        self._collect(directory, sort, self._filter_for(kind), output)
        return output

    def directory_size(self, directory: str) -> int:
        """Compute the total size of every file below a directory.

        Args:
            directory: Directory to measure.

        Returns:
            Sum of file sizes in bytes (0 for an empty tree).

        Raises:
            NotFoundError: If ``directory`` is not a directory or a file
                disappears during measurement.
        """
        files = self.scan(directory, SortOrder.ASCENDING, FilterKind.FILE_ONLY, as_tree=False)
        if files is None:
            msg = f"Directory not found [{directory}]"
            raise NotFoundError(msg, directory)
        return total_file_size(self._ops, files)

    def _entries(self, directory: str, order: SortOrder) -> list[Entry]:
        """List the children of a directory as entries.

        Listing errors are not caught; a failure aborts the whole scan.
        """
        return [
            Entry(name=name, full_path=os.path.join(directory, name))
            for name in self._ops.list_directory(directory, order)
            if name not in _DOT_ENTRIES
        ]

    def _filter_for(self, kind: FilterKind) -> Callable[[str], bool]:
        """Select the predicate a flat scan applies to each path."""
        if kind == FilterKind.FILE_ONLY:
            return self._ops.is_file
        if kind == FilterKind.DIR_ONLY:
            return self._ops.is_dir
        return lambda _path: True

    def _collect(
        self,
        directory: str,
        order: SortOrder,
        accept: Callable[[str], bool],
        output: list[str],
    ) -> None:
        """Append matching descendants of ``directory`` to ``output``.

        Args:
            directory: Directory whose children are visited.
            order: Listing order for every level.
            accept: Filter predicate applied to each full path.
            output: Accumulator owned by the top-level scan call.
        """
        for entry in self._entries(directory, order):
            if self._ops.is_dir(entry.full_path):
                self._collect(entry.full_path, order, accept, output)
            if accept(entry.full_path):
                output.append(entry.full_path)

    def _build_tree(self, directory: str, order: SortOrder) -> ScanTree:
        """Mirror a directory as a nested mapping; leaves map to None."""
        tree: ScanTree = {}
        for entry in self._entries(directory, order):
            if self._ops.is_dir(entry.full_path):
                tree[entry.name] = self._build_tree(entry.full_path, order)
            else:
                tree[entry.name] = None
        return tree
