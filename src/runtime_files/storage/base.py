"""
Abstract collaborators consumed by file managers.

A storage backend performs byte-level I/O on physical locations that were
already resolved by a file manager. A content-type resolver maps a
location onto a MIME type.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    All operations take canonical absolute locations. Errors are raised as
    the matching ``OSError`` subclass (``FileNotFoundError``,
    ``PermissionError``, ...) and are not translated by file managers.
    """

    @property
    def name(self) -> str:
        """Get the backend name."""
        return self.__class__.__name__

    @abstractmethod
    async def exists(self, location: str) -> bool:
        """Check if a file or directory exists at the location."""
        ...

    @abstractmethod
    async def read_bytes(self, location: str) -> bytes:
        """
        Read the raw content of a file.

        Raises:
            FileNotFoundError: If nothing exists at the location
        """
        ...

    @abstractmethod
    async def write_bytes(self, location: str, content: bytes) -> None:
        """
        Write raw content to a file, overwriting it.

        Missing parent directories are created first.
        """
        ...

    @abstractmethod
    async def copy(self, source: str, destination: str) -> None:
        """
        Copy a file or directory tree, overwriting the destination.

        Raises:
            FileNotFoundError: If the source does not exist
        """
        ...

    @abstractmethod
    async def remove(self, location: str) -> None:
        """Remove a file or directory tree. Missing locations are ignored."""
        ...

    @abstractmethod
    async def glob(self, root: str, pattern: str) -> list[str]:
        """
        Expand a glob pattern beneath a root.

        ``**`` matches zero or more directories. Wildcards never match names
        starting with a dot.

        Args:
            root: Canonical root location
            pattern: Glob pattern relative to the root

        Returns:
            Absolute locations of all matches, in traversal order
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the backend."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ContentTypeResolver(ABC):
    """Maps locations to content types."""

    @abstractmethod
    def lookup(self, location: str) -> Optional[str]:
        """Return the content type for a location, or None if unknown."""
        ...
