"""
File manager for an in-memory object store.

Behaves like LocalFileManager but keeps every file in memory under
absolute POSIX keys. Useful for testing and for runtimes that assemble a
tree without writing it to disk.
"""

from typing import Optional

from runtime_files.filesystem.manager import StorageFileManager
from runtime_files.storage.base import ContentTypeResolver
from runtime_files.storage.memory import MemoryStorageBackend


class MemoryFileManager(StorageFileManager):
    """
    File manager backed by a MemoryStorageBackend.

    The root is a POSIX location in the object store's key space; a relative
    root is taken relative to ``/``. Locations are normalized without
    consulting the local disk.

    Example:
        ```python
        manager = MemoryFileManager("/app", files={
            "main.js": b"export default {}",
            "app.segment.json": b"{}",
        })

        await manager.get_segment_files()   # ["/app/app.segment.json"]
        ```
    """

    def __init__(
        self,
        location: str = "/",
        *,
        files: Optional[dict[str, bytes]] = None,
        backend: Optional[MemoryStorageBackend] = None,
        content_types: Optional[ContentTypeResolver] = None,
        **kwargs,
    ):
        """
        Initialize the file manager.

        Args:
            location: Root location in the key space
            files: Initial files keyed by logical filename
            backend: Existing backend to share (a new one if not provided)
            content_types: Content type resolver
            **kwargs: Extension settings passed to FileManager
        """
        super().__init__(
            location,
            backend or MemoryStorageBackend(),
            content_types=content_types,
            follow_symlinks=False,
            **kwargs,
        )

        for filename, content in (files or {}).items():
            self.backend.put(self.get_absolute_location(filename), content)

    @property
    def files(self) -> dict[str, bytes]:
        """Snapshot of the stored files keyed by filename relative to the root."""
        return {
            self.get_relative_location(location): content
            for location, content in self.backend.files.items()
            if self.resolver.is_within_root(location)
        }
