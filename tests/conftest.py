"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from fskit.filesystem.models import Operation
from fskit.filesystem.provider import LocalFileOperations


class ScriptedOperations(LocalFileOperations):
    """Local provider whose primitives can be made to fail.

    Attributes:
        failing: Names of primitives that return False instead of acting.
        calls: Log of (primitive, path) pairs for mutating primitives.
    """

    def __init__(
        self,
        capabilities: frozenset[Operation] | None = None,
        failing: set[str] | None = None,
        random: bytes = b"\x00\x01\x02",
    ) -> None:
        super().__init__(capabilities)
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []
        self._random = random

    def _attempt(self, name: str, path: str) -> bool:
        self.calls.append((name, path))
        return name not in self.failing

    def rename(self, source: str, target: str) -> bool:
        return self._attempt("rename", source) and super().rename(source, target)

    def unlink(self, path: str) -> bool:
        return self._attempt("unlink", path) and super().unlink(path)

    def remove_empty_directory(self, path: str) -> bool:
        return self._attempt("remove_empty_directory", path) and super().remove_empty_directory(
            path
        )

    def chmod(self, path: str, mode: int) -> bool:
        return self._attempt("chmod", path) and super().chmod(path, mode)

    def mkdir(self, path: str, mode: int = 0o777, parents: bool = False) -> bool:
        return self._attempt("mkdir", path) and super().mkdir(path, mode, parents)

    def touch(self, path: str, mtime: float | None = None, atime: float | None = None) -> bool:
        return self._attempt("touch", path) and super().touch(path, mtime, atime)

    def write(self, path: str, data: bytes, lock: bool = False) -> bool:
        return self._attempt("write", path) and super().write(path, data, lock)

    def random_bytes(self, count: int) -> bytes:
        return self._random[:count]


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create D = {a, b, c, S/{d}} with distinct file sizes.

    Sizes: a=1, b=22, c=333, S/d=4444 bytes.
    """
    root = tmp_path / "D"
    root.mkdir()
    (root / "a").write_bytes(b"a" * 1)
    (root / "b").write_bytes(b"b" * 22)
    (root / "c").write_bytes(b"c" * 333)
    (root / "S").mkdir()
    (root / "S" / "d").write_bytes(b"d" * 4444)
    return root


@pytest.fixture
def scripted() -> Callable[..., ScriptedOperations]:
    """Factory for ScriptedOperations providers."""
    return ScriptedOperations

