"""Tests for filesystem domain models."""

import pytest
from fskit.filesystem.models import Entry, FilterKind, Operation, SortOrder


class TestFilterKind:
    """Tests for FilterKind enum."""

    def test_filter_kind_codes(self) -> None:
        """The four filter kinds keep their numeric codes."""
        assert FilterKind.ALL == 0
        assert FilterKind.FILE_ONLY == 1
        assert FilterKind.DIR_ONLY == 2
        assert FilterKind.TOP_LEVEL_ONLY == 3
        assert len(FilterKind) == 4

    def test_out_of_range_code(self) -> None:
        """Unknown codes are rejected by the enum itself."""
        with pytest.raises(ValueError):
            FilterKind(7)


class TestSortOrder:
    """Tests for SortOrder enum."""

    def test_sort_order_codes(self) -> None:
        """Sort orders map to stable codes."""
        assert SortOrder.ASCENDING == 0
        assert SortOrder.DESCENDING == 1
        assert SortOrder.NONE == 2


class TestOperation:
    """Tests for Operation enum."""

    def test_operation_is_str_enum(self) -> None:
        """Operation values are the primitive method names."""
        assert isinstance(Operation.UNLINK, str)
        assert Operation.REMOVE_EMPTY_DIRECTORY.value == "remove_empty_directory"


class TestEntry:
    """Tests for Entry dataclass."""

    def test_entry_fields(self) -> None:
        """Entry keeps the leaf name and full path."""
        entry = Entry(name="a", full_path="/tmp/D/a")

        assert entry.name == "a"
        assert entry.full_path == "/tmp/D/a"

    @pytest.mark.parametrize("name", ["", ".", ".."])
    def test_rejects_self_and_parent(self, name: str) -> None:
        """Self and parent references are not entries."""
        with pytest.raises(ValueError, match="Invalid entry name"):
            Entry(name=name, full_path=f"/tmp/{name}")

    def test_entry_is_frozen(self) -> None:
        """Entry is immutable."""
        entry = Entry(name="a", full_path="/tmp/a")

        with pytest.raises(AttributeError):
            entry.name = "b"  # type: ignore[misc]
