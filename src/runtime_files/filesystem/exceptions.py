"""
Exceptions for file manager operations.

Error messages raised from this package carry logical filenames only.
Resolved physical locations never appear in them, so they can be shown
to untrusted callers without disclosing the filesystem layout.
"""

from typing import Optional


class FileManagerError(Exception):
    """Base exception for file manager operations."""

    pass


class FileNotFound(FileManagerError):
    """Raised when a logical filename has no backing file."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"File not found: {filename}")


class PathOutsideRootError(FileManagerError):
    """Raised by the opt-in containment check when a filename escapes the root."""

    def __init__(self, filename: str, reason: str = "Path is outside the root location"):
        self.filename = filename
        self.reason = reason
        super().__init__(f"{reason}: {filename}")


class StorageTypeNotFoundError(FileManagerError):
    """Raised when the requested storage type is not registered."""

    def __init__(self, message: str, *, storage: Optional[str] = None):
        super().__init__(message)
        self.storage = storage


class FileManagerConfigurationError(FileManagerError):
    """Raised when there's an error in the file manager configuration."""

    pass
