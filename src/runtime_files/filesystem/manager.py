"""
File manager composed from a location resolver and a storage backend.
"""

import logging
from typing import Optional, Union

from runtime_files.filesystem.base import DEFAULT_CONTENT_TYPE, FileManager
from runtime_files.filesystem.exceptions import FileNotFound
from runtime_files.filesystem.resolver import LocationResolver, PathLike
from runtime_files.storage.base import ContentTypeResolver, StorageBackend
from runtime_files.storage.content_types import MimeTypesResolver

logger = logging.getLogger(__name__)


class StorageFileManager(FileManager):
    """
    File manager that resolves logical filenames beneath a root and
    delegates byte-level I/O to a storage backend.

    Backend errors other than a missing file on read are propagated as
    they are. Nothing is retried and nothing is cached.
    """

    def __init__(
        self,
        location: PathLike,
        backend: StorageBackend,
        *,
        content_types: Optional[ContentTypeResolver] = None,
        follow_symlinks: bool = True,
        **kwargs,
    ):
        """
        Initialize the file manager.

        Args:
            location: Root location of the file tree
            backend: Storage backend performing the I/O
            content_types: Content type resolver (mimetypes registry if not provided)
            follow_symlinks: Resolve symbolic links when canonicalizing locations
            **kwargs: Extension settings passed to FileManager
        """
        super().__init__(**kwargs)
        self.resolver = LocationResolver(location, follow_symlinks=follow_symlinks)
        self.backend = backend
        self.content_types = content_types or MimeTypesResolver()

    def get_root_location(self) -> str:
        return self.resolver.get_root_location()

    def get_absolute_location(self, filename: str) -> str:
        return self.resolver.get_absolute_location(filename)

    def get_relative_location(self, location: str) -> str:
        return self.resolver.get_relative_location(location)

    def get_contained_location(self, filename: str) -> str:
        return self.resolver.get_contained_location(filename)

    async def exists(self, filename: str) -> bool:
        location = self.get_absolute_location(filename)

        return await self.backend.exists(location)

    async def get_type(self, filename: str) -> str:
        location = self.get_absolute_location(filename)

        return self.content_types.lookup(location) or DEFAULT_CONTENT_TYPE

    async def get_content(self, filename: str) -> bytes:
        location = self.get_absolute_location(filename)

        if not await self.backend.exists(location):
            # The location stays out of the error, it reveals the filesystem layout
            logger.debug(f"No file at {location} for {filename}")
            raise FileNotFound(filename)

        return await self.backend.read_bytes(location)

    async def store(self, filename: str, content: Union[bytes, str]) -> None:
        location = self.get_absolute_location(filename)

        if isinstance(content, str):
            content = content.encode("utf-8")

        await self.backend.write_bytes(location, content)
        logger.info(f"Stored {filename} ({len(content)} bytes)")

    async def copy(self, source: str, destination: str) -> None:
        source_location = self.get_absolute_location(source)
        destination_location = self.get_absolute_location(destination)

        await self.backend.copy(source_location, destination_location)
        logger.info(f"Copied {source} to {destination}")

    async def remove(self, filename: str) -> None:
        location = self.get_absolute_location(filename)

        await self.backend.remove(location)
        logger.info(f"Removed {filename}")

    async def match_files(self, pattern: str) -> list[str]:
        location = self.get_absolute_location("./")

        matches = await self.backend.glob(location, pattern)
        logger.debug(f"Pattern {pattern} matched {len(matches)} files")
        return matches

    async def close(self) -> None:
        await self.backend.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"root={self.resolver.root!r}, "
            f"backend={self.backend.name})"
        )
