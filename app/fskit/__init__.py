"""fskit - filesystem scanning and bulk file operations.

Recursive directory scans with flat or tree output, safe recursive
deletion, and file operations that raise instead of failing silently.
"""

__version__ = "0.3.0"
