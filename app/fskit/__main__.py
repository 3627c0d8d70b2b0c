"""Allow running fskit as ``python -m fskit``."""

from fskit.cli.main import app

app(prog_name="fskit")
