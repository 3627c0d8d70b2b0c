"""Developer tasks for fskit.

Usage: python devops.py <task> (with fskit installed, e.g. `pip install -e .`)
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys
from pathlib import Path

from fskit.filesystem import FilterKind, Filesystem

ROOT = Path(__file__).resolve().parent

# Directory names removed anywhere in the tree by `clean`
CACHE_DIRS = frozenset({"__pycache__", ".pytest_cache", ".ruff_cache", ".mypy_cache"})
# Trees never descended into by `clean`
SKIPPED_DIRS = (".git", ".venv")
# Top-level build output removed by `clean`
BUILD_DIRS = ("build", "dist", "htmlcov")


def _run(commands: list[list[str]]) -> None:
    """Execute commands in order, exiting with the first failing return code."""
    for cmd in commands:
        try:
            subprocess.run(cmd, check=True, cwd=ROOT)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    """Format the codebase with Ruff."""
    _run([["ruff", "format", "."], ["ruff", "check", "--fix", "."]])


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _run([["ruff", "format", "--check", "."], ["ruff", "check", "."]])


def test() -> None:
    """Run the test suite with pytest."""
    _run([[sys.executable, "-m", "pytest", "-q"]])


def clean() -> None:
    """Delete caches and build artifacts using fskit itself."""
    fs = Filesystem()
    found = fs.scan(str(ROOT), filter_kind=FilterKind.DIR_ONLY, as_tree=False) or []

    found = [p for p in found if not any(f"/{s}/" in p + "/" for s in SKIPPED_DIRS)]
    targets = [p for p in found if Path(p).name in CACHE_DIRS]
    targets += [str(ROOT / name) for name in BUILD_DIRS if fs.is_dir(str(ROOT / name))]
    targets += [p for p in found if p.endswith(".egg-info")]

    # Post-order scan lists nested caches first; drop any already covered by a parent
    roots = [t for t in targets if not any(t != o and t.startswith(o + "/") for o in targets)]
    fs.delete(roots, recursive=True)
    print(f"Removed {len(roots)} cache and build director{'y' if len(roots) == 1 else 'ies'}.")


TASKS = {
    "fmt": format_code,
    "lint": lint,
    "test": test,
    "clean": clean,
}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__.strip(), file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
