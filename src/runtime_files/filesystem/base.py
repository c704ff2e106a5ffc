"""
Abstract base class for file managers.

This module defines the file manager capability the module-loading
runtime consumes, independent of where the files are stored.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Union

from runtime_files.filesystem.classification import (
    DEFAULT_CONFIG_EXTENSION,
    DEFAULT_MODULE_EXTENSION,
    FileCategory,
    classify,
    is_generated_file,
)
from runtime_files.filesystem.exceptions import FileManagerConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class File:
    """
    A loaded file.

    Attributes:
        filename: The logical filename the file was loaded by
        type: Content type of the file
        content: Raw file content
    """

    filename: str
    type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        """Get the content size in bytes."""
        return len(self.content)

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the content as text."""
        return self.content.decode(encoding)


class FileManager(ABC):
    """
    Abstract base class for file managers.

    A file manager gives access to a tree of files beneath a fixed root.
    Implementations provide location resolution and byte-level access; file
    discovery by naming convention is shared by all of them.

    Example:
        ```python
        async with LocalFileManager("./dist") as manager:
            for location in await manager.get_segment_files():
                print(manager.get_relative_location(location))

            file = await manager.load("index.js")
        ```
    """

    def __init__(
        self,
        *,
        module_extension: str = DEFAULT_MODULE_EXTENSION,
        config_extension: str = DEFAULT_CONFIG_EXTENSION,
    ):
        """
        Initialize the file manager.

        Args:
            module_extension: Extension of executable modules, without dot
            config_extension: Extension of segment configurations, without dot
        """
        self.module_extension = module_extension.lstrip(".")
        self.config_extension = config_extension.lstrip(".")

        if not self.module_extension or not self.config_extension:
            raise FileManagerConfigurationError(
                "Module and config extensions must not be empty"
            )

    # Locations

    @abstractmethod
    def get_root_location(self) -> str:
        """Return the canonical absolute root location."""
        ...

    @abstractmethod
    def get_absolute_location(self, filename: str) -> str:
        """Resolve a root-relative or absolute logical filename."""
        ...

    @abstractmethod
    def get_relative_location(self, location: str) -> str:
        """Return a physical location relative to the root."""
        ...

    @abstractmethod
    def get_contained_location(self, filename: str) -> str:
        """
        Resolve a logical filename that must stay beneath the root.

        Raises:
            PathOutsideRootError: If the location escapes the root
        """
        ...

    # Content

    @abstractmethod
    async def exists(self, filename: str) -> bool:
        """Check if a file exists for the logical filename."""
        ...

    @abstractmethod
    async def get_type(self, filename: str) -> str:
        """
        Return the content type of a file.

        Falls back to ``application/octet-stream`` and never fails.
        """
        ...

    @abstractmethod
    async def get_content(self, filename: str) -> bytes:
        """
        Read the raw content of a file.

        Raises:
            FileNotFound: If the file does not exist
        """
        ...

    @abstractmethod
    async def store(self, filename: str, content: Union[bytes, str]) -> None:
        """Write a file, creating missing directories and overwriting it."""
        ...

    @abstractmethod
    async def copy(self, source: str, destination: str) -> None:
        """Copy a file or directory, overwriting the destination."""
        ...

    @abstractmethod
    async def remove(self, filename: str) -> None:
        """Remove a file or directory. Missing files are ignored."""
        ...

    @abstractmethod
    async def match_files(self, pattern: str) -> list[str]:
        """
        Expand a glob pattern beneath the root.

        Returns:
            Absolute locations of the matches, in traversal order
        """
        ...

    async def load(self, filename: str) -> File:
        """
        Load a file together with its content type.

        Raises:
            FileNotFound: If the file does not exist
        """
        content_type = await self.get_type(filename)
        content = await self.get_content(filename)

        return File(filename, content_type, content)

    # Discovery

    async def get_module_file_names(self) -> list[str]:
        """Find all module files, including generated segment modules."""
        return await self.match_files(f"**/*.{self.module_extension}")

    async def get_segment_files(self) -> list[str]:
        """Find all segment configuration files."""
        return await self.match_files(f"**/*.segment.{self.config_extension}")

    async def get_node_segment_files(self) -> list[str]:
        """Find generated segment modules for the local runtime."""
        return await self.match_files(f"**/*.segment.local.{self.module_extension}")

    async def get_repository_segment_files(self) -> list[str]:
        """Find generated segment modules published to the repository."""
        return await self.match_files(
            f"**/*.segment.repository.{self.module_extension}"
        )

    async def get_asset_files(self, patterns: list[str]) -> list[str]:
        """
        Find the hand-authored asset files matching any of the patterns.

        Each pattern is expanded independently and the results are joined
        in pattern order. Files matched by more than one pattern are listed
        once per match. Generated variants (``*.local.*``,
        ``*.repository.*``, ``*.remote.*``) are left out.

        Args:
            patterns: Glob patterns relative to the root

        Returns:
            Filenames relative to the root

        Raises:
            Exception: The first failure of any pattern expansion; the
                remaining expansions are cancelled
        """
        matches = await self._match_all(patterns)

        asset_files = [
            self.get_relative_location(location)
            for locations in matches
            for location in locations
        ]

        return [filename for filename in asset_files if not is_generated_file(filename)]

    def classify(self, filename: str) -> FileCategory:
        """Classify a filename using this manager's extensions."""
        return classify(filename, self.module_extension, self.config_extension)

    async def _match_all(self, patterns: list[str]) -> list[list[str]]:
        tasks = [asyncio.create_task(self.match_files(pattern)) for pattern in patterns]

        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def close(self) -> None:
        """
        Close any resources held by the file manager.

        Subclasses should override this to release backend connections.
        """
        pass

    async def __aenter__(self) -> "FileManager":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={self.get_root_location()!r})"
