"""
Errors that abort a fuzzy finder walk.

Directories that cannot be opened are not errors: the walker reports them
and carries on with the rest of the tree.
"""


class WalkerError(Exception):
    """Base class for errors that abort the whole walk."""
    pass


class PathTooLongError(WalkerError):
    """Raised when an accumulated path exceeds the configured maximum length."""

    def __init__(self, path: str, limit: int):
        super().__init__(f"Path exceeds {limit} bytes: {path}")
        self.path = path
        self.limit = limit


class DirectoryCloseError(WalkerError):
    """Raised when a directory listing fails to close."""
    pass
