"""
File manager for a local directory tree.
"""

from typing import Optional

from runtime_files.filesystem.manager import StorageFileManager
from runtime_files.filesystem.resolver import PathLike
from runtime_files.storage.base import ContentTypeResolver
from runtime_files.storage.local import LocalStorageBackend


class LocalFileManager(StorageFileManager):
    """
    File manager for files on the local disk.

    Locations are canonicalized with symbolic links resolved.

    Usage:
        manager = LocalFileManager("./dist")

        await manager.store("shared/config.segment.json", "{}")
        modules = await manager.get_module_file_names()
        assets = await manager.get_asset_files(["**/*.css", "**/*.png"])
    """

    def __init__(
        self,
        location: PathLike,
        *,
        content_types: Optional[ContentTypeResolver] = None,
        **kwargs,
    ):
        super().__init__(
            location,
            LocalStorageBackend(),
            content_types=content_types,
            follow_symlinks=True,
            **kwargs,
        )
