"""Exception hierarchy for filesystem operations.

Every failure raised by fskit derives from FilesystemError and carries
the offending path(s) so callers can report them without parsing the
message.
"""


class FilesystemError(Exception):
    """Base exception for filesystem operation errors.

    Attributes:
        paths: Paths involved in the failed operation.
    """

    def __init__(self, message: str, *paths: str) -> None:
        super().__init__(message)
        self.paths: tuple[str, ...] = paths


class NotFoundError(FilesystemError):
    """Raised when a required file or directory does not exist."""


class InvalidArgumentError(FilesystemError):
    """Raised when an argument is outside its accepted range."""


class PathTooLongError(FilesystemError):
    """Raised when a path exceeds the platform path-length ceiling."""


class FunctionUnavailableError(FilesystemError):
    """Raised when the provider does not support a primitive operation.

    Attributes:
        operation: Name of the unsupported primitive.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Unable to perform filesystem operation because {operation}() is unavailable"
        )
        self.operation = operation


class RemovalFailedError(FilesystemError):
    """Raised when a file, symlink or directory could not be removed."""


class RenameFailedError(FilesystemError):
    """Raised when a rename is refused or fails."""


class CreateFailedError(FilesystemError):
    """Raised when a directory could not be created."""


class TouchFailedError(FilesystemError):
    """Raised when a file could not be touched."""


class WriteFailedError(FilesystemError):
    """Raised when content could not be written to a file."""


class CopyFailedError(FilesystemError):
    """Raised when a copy could not be opened, verified or completed."""
