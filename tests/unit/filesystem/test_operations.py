"""Unit tests for the Filesystem facade."""

import os
import stat
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
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
from fskit.filesystem.models import FilterKind
from fskit.filesystem.operations import Filesystem


class TestPredicates:
    """Tests for multi-path predicates."""

    def test_single_path_and_list(self, sample_tree: Path) -> None:
        """Predicates accept one path or several."""
        fs = Filesystem()

        assert fs.is_dir(str(sample_tree))
        assert fs.is_file([str(sample_tree / "a"), str(sample_tree / "b")])

    def test_all_must_hold(self, sample_tree: Path) -> None:
        """One failing path makes the predicate false."""
        fs = Filesystem()

        assert not fs.is_file([str(sample_tree / "a"), str(sample_tree / "S")])
        assert not fs.exists([str(sample_tree), str(sample_tree / "missing")])

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling link is a link that does not exist."""
        link = tmp_path / "dead"
        link.symlink_to(tmp_path / "missing")
        fs = Filesystem()

        assert fs.is_link(str(link))
        assert not fs.exists(str(link))

    def test_permission_predicates(self, sample_tree: Path) -> None:
        """Readable and writable files report so."""
        fs = Filesystem()

        assert fs.is_readable(str(sample_tree / "a"))
        assert fs.is_writable(str(sample_tree / "a"))
        assert not fs.is_executable(str(sample_tree / "a"))

    def test_has_dir(self, sample_tree: Path) -> None:
        """has_dir needs at least one path, all of them directories."""
        fs = Filesystem()

        assert fs.has_dir(str(sample_tree))
        assert fs.has_dir([str(sample_tree), str(sample_tree / "S")])
        assert not fs.has_dir([str(sample_tree), str(sample_tree / "a")])
        assert not fs.has_dir([])

    def test_is_empty_dir(self, sample_tree: Path, tmp_path: Path) -> None:
        """Only directories with children are non-empty."""
        empty = tmp_path / "empty"
        empty.mkdir()
        fs = Filesystem()

        assert fs.is_empty_dir(str(empty))
        assert not fs.is_empty_dir(str(sample_tree))
        assert fs.is_empty_dir(str(sample_tree / "a"))


class TestScanAndSizes:
    """Tests for scanning and size helpers."""

    def test_scan_delegates(self, sample_tree: Path) -> None:
        """scan returns the scanner's result."""
        result = Filesystem().scan(str(sample_tree), filter_kind=FilterKind.DIR_ONLY, as_tree=False)

        assert result == [str(sample_tree / "S")]

    def test_scandir(self, sample_tree: Path) -> None:
        """scandir lists one level."""
        assert Filesystem().scandir(str(sample_tree), exclude_dots=True) == ["S", "a", "b", "c"]

    def test_dirsize(self, sample_tree: Path) -> None:
        """dirsize sums every nested file."""
        assert Filesystem().dirsize(str(sample_tree)) == 4800

    def test_filesize_of_several_files(self, sample_tree: Path) -> None:
        """filesize sums the given files."""
        fs = Filesystem()

        assert fs.filesize([str(sample_tree / "a"), str(sample_tree / "c")]) == 334

    def test_filesize_rejects_directories(self, sample_tree: Path) -> None:
        """A directory among the files raises NotFoundError."""
        with pytest.raises(NotFoundError):
            Filesystem().filesize([str(sample_tree / "a"), str(sample_tree / "S")])


class TestCreation:
    """Tests for mkdir, touch, create and put."""

    def test_mkdir_creates_parents(self, tmp_path: Path) -> None:
        """Nested directories are created in one call."""
        target = tmp_path / "x" / "y" / "z"

        Filesystem().mkdir(str(target))

        assert target.is_dir()

    def test_mkdir_skips_existing(self, tmp_path: Path, scripted: Callable) -> None:
        """Existing directories are not created again."""
        provider = scripted()

        Filesystem(provider).mkdir([str(tmp_path)])

        assert provider.calls == []

    def test_mkdir_failure(self, tmp_path: Path, scripted: Callable) -> None:
        """A directory that cannot be created raises CreateFailedError."""
        target = tmp_path / "new"

        with pytest.raises(CreateFailedError, match=r"\[new\]"):
            Filesystem(scripted(failing={"mkdir"})).mkdir(str(target))

    def test_touch_sets_mtime(self, tmp_path: Path) -> None:
        """touch creates the file with the requested mtime."""
        target = tmp_path / "t"

        Filesystem().touch(str(target), mtime=1_234_567)

        assert target.exists()
        assert os.path.getmtime(target) == 1_234_567

    def test_touch_failure(self, tmp_path: Path) -> None:
        """Touching inside a missing directory raises TouchFailedError."""
        target = tmp_path / "missing" / "t"

        with pytest.raises(TouchFailedError) as excinfo:
            Filesystem().touch(str(target))
        assert excinfo.value.paths == (str(target),)

    def test_create_makes_parents(self, tmp_path: Path) -> None:
        """create builds missing parent directories."""
        target = tmp_path / "a" / "b" / "file"

        Filesystem().create(str(target))

        assert target.is_file()

    def test_put_text_and_bytes(self, tmp_path: Path) -> None:
        """put writes text as UTF-8 and bytes unchanged."""
        fs = Filesystem()
        text_file = tmp_path / "sub" / "text"
        bytes_file = tmp_path / "bytes"

        fs.put(str(text_file), "héllo")
        fs.put(str(bytes_file), b"\x00\x01", lock=True)

        assert text_file.read_text(encoding="utf-8") == "héllo"
        assert bytes_file.read_bytes() == b"\x00\x01"

    def test_put_failure(self, tmp_path: Path, scripted: Callable) -> None:
        """A failed write raises WriteFailedError."""
        with pytest.raises(WriteFailedError, match="Failed to write file"):
            Filesystem(scripted(failing={"write"})).put(str(tmp_path / "f"), "x")


class TestRenameAndMove:
    """Tests for rename and move."""

    def test_rename(self, tmp_path: Path) -> None:
        """rename moves the file."""
        source = tmp_path / "a"
        source.write_text("a")

        Filesystem().rename(str(source), str(tmp_path / "b"))

        assert not source.exists()
        assert (tmp_path / "b").read_text() == "a"

    def test_rename_refuses_existing_target(self, tmp_path: Path) -> None:
        """An existing target is kept unless overwrite is set."""
        source = tmp_path / "a"
        target = tmp_path / "b"
        source.write_text("new")
        target.write_text("old")

        with pytest.raises(RenameFailedError, match="already exists"):
            Filesystem().rename(str(source), str(target))

        assert target.read_text() == "old"

    def test_rename_overwrite(self, tmp_path: Path) -> None:
        """overwrite replaces an existing file."""
        source = tmp_path / "a"
        target = tmp_path / "b"
        source.write_text("new")
        target.write_text("old")

        Filesystem().rename(str(source), str(target), overwrite=True)

        assert target.read_text() == "new"

    def test_rename_failure(self, tmp_path: Path, scripted: Callable) -> None:
        """A failing primitive raises RenameFailedError naming both paths."""
        source = tmp_path / "a"
        source.write_text("a")
        target = tmp_path / "b"

        with pytest.raises(RenameFailedError) as excinfo:
            Filesystem(scripted(failing={"rename"})).rename(str(source), str(target))
        assert excinfo.value.paths == (str(source), str(target))

    def test_move_into_directory(self, sample_tree: Path, tmp_path: Path) -> None:
        """move keeps the base name inside the target directory."""
        destination = tmp_path / "dest"
        destination.mkdir()

        Filesystem().move(str(sample_tree / "S"), str(destination))

        assert (destination / "S" / "d").exists()
        assert not (sample_tree / "S").exists()

    def test_move_requires_directory(self, sample_tree: Path) -> None:
        """A non-directory target raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            Filesystem().move(str(sample_tree / "a"), str(sample_tree / "b"))


class TestCopy:
    """Tests for copy."""

    def test_copy_preserves_content_and_mtime(self, tmp_path: Path) -> None:
        """The copy has the same bytes and modification time."""
        source = tmp_path / "src"
        source.write_bytes(b"payload")
        os.utime(source, (1_000_000, 1_000_000))
        target = tmp_path / "out" / "dst"

        Filesystem().copy(str(source), str(target))

        assert target.read_bytes() == b"payload"
        assert os.path.getmtime(target) == 1_000_000

    def test_copy_keeps_execute_bits(self, tmp_path: Path) -> None:
        """Execute bits of the source are added to the target."""
        source = tmp_path / "script"
        source.write_text("#!/bin/sh\n")
        source.chmod(0o755)
        target = tmp_path / "copy"

        Filesystem().copy(str(source), str(target))

        assert stat.S_IMODE(target.stat().st_mode) & 0o111 == 0o111

    def test_copy_skips_newer_target(self, tmp_path: Path) -> None:
        """A target at least as new as the source is left alone."""
        source = tmp_path / "src"
        target = tmp_path / "dst"
        source.write_text("new")
        target.write_text("kept")
        os.utime(source, (1_000, 1_000))
        os.utime(target, (2_000, 2_000))

        Filesystem().copy(str(source), str(target))

        assert target.read_text() == "kept"

    def test_copy_overwrite_ignores_mtime(self, tmp_path: Path) -> None:
        """overwrite copies even onto a newer target."""
        source = tmp_path / "src"
        target = tmp_path / "dst"
        source.write_text("new")
        target.write_text("kept")
        os.utime(source, (1_000, 1_000))
        os.utime(target, (2_000, 2_000))

        Filesystem().copy(str(source), str(target), overwrite=True)

        assert target.read_text() == "new"

    def test_copy_missing_source(self, tmp_path: Path) -> None:
        """A missing source raises NotFoundError."""
        with pytest.raises(NotFoundError, match=r"\[missing\]"):
            Filesystem().copy(str(tmp_path / "missing"), str(tmp_path / "dst"))

    def test_copy_unopenable_target(self, tmp_path: Path) -> None:
        """A target that cannot be opened raises CopyFailedError."""
        source = tmp_path / "src"
        source.write_text("x")
        target = tmp_path / "dir"
        target.mkdir()

        with pytest.raises(CopyFailedError, match="target could not be opened"):
            Filesystem().copy(str(source), str(target), overwrite=True)

    @pytest.mark.parametrize("overwrite", [True, False])
    def test_copy_onto_itself(self, tmp_path: Path, overwrite: bool) -> None:
        """Copying a file onto itself fails and keeps its content."""
        source = tmp_path / "same"
        source.write_bytes(b"data")

        with pytest.raises(CopyFailedError, match="onto itself"):
            Filesystem().copy(str(source), str(source), overwrite=overwrite)

        assert source.read_bytes() == b"data"

    def test_copy_onto_hard_link(self, tmp_path: Path) -> None:
        """A hard link to the source counts as the same file."""
        source = tmp_path / "src"
        source.write_bytes(b"data")
        link = tmp_path / "link"
        os.link(source, link)

        with pytest.raises(CopyFailedError):
            Filesystem().copy(str(source), str(link), overwrite=True)

        assert link.read_bytes() == b"data"

    def test_short_copy(self, tmp_path: Path) -> None:
        """A byte count that differs from the source size raises CopyFailedError."""
        source = tmp_path / "src"
        target = tmp_path / "dst"
        source.write_bytes(b"12345")
        target.write_bytes(b"")

        with (
            patch.object(Filesystem, "_copy_bytes", return_value=2),
            pytest.raises(CopyFailedError, match=r"\(2 of 5 bytes copied\)"),
        ):
            Filesystem().copy(str(source), str(target), overwrite=True)


class TestRemoval:
    """Tests for delete, remove and empty."""

    def test_delete_single_path(self, sample_tree: Path) -> None:
        """delete accepts a single path string."""
        Filesystem().delete(str(sample_tree), recursive=True)

        assert not sample_tree.exists()

    def test_remove_renames_aside(self, sample_tree: Path, scripted: Callable) -> None:
        """remove takes the non-recursive path with the rename step."""
        provider = scripted()

        Filesystem(provider).remove(str(sample_tree))

        assert provider.calls[0] == ("rename", str(sample_tree))
        assert not sample_tree.exists()

    def test_empty_file(self, sample_tree: Path) -> None:
        """empty truncates files in place."""
        target = sample_tree / "c"

        Filesystem().empty(str(target))

        assert target.exists()
        assert target.stat().st_size == 0

    def test_empty_directory(self, sample_tree: Path) -> None:
        """empty removes the children but keeps the directory."""
        Filesystem().empty(str(sample_tree))

        assert sample_tree.is_dir()
        assert os.listdir(sample_tree) == []

    def test_shared_operations(self) -> None:
        """A pre-built guarded provider is used as given."""
        ops = GuardedOperations()

        assert Filesystem(operations=ops).operations is ops
