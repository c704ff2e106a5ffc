"""
File managers for rooted file trees.

This module resolves logical filenames beneath a fixed root, reads and
writes file content through a storage backend, and discovers modules,
segments and assets by naming convention.

Example:
    ```python
    from runtime_files.filesystem import LocalFileManager

    manager = LocalFileManager("./dist")

    file = await manager.load("index.js")
    segments = await manager.get_segment_files()
    assets = await manager.get_asset_files(["**/*.css"])
    ```
"""

from runtime_files.filesystem.base import DEFAULT_CONTENT_TYPE, File, FileManager
from runtime_files.filesystem.classification import (
    FileCategory,
    classify,
    is_generated_file,
    is_module_file,
    is_node_segment_file,
    is_repository_segment_file,
    is_segment_file,
)
from runtime_files.filesystem.config import FileManagerConfig, StorageType
from runtime_files.filesystem.exceptions import (
    FileManagerConfigurationError,
    FileManagerError,
    FileNotFound,
    PathOutsideRootError,
    StorageTypeNotFoundError,
)
from runtime_files.filesystem.factory import (
    create_file_manager,
    get_file_manager,
    is_storage_registered,
    list_storage_types,
    register_file_manager,
)
from runtime_files.filesystem.local import LocalFileManager
from runtime_files.filesystem.manager import StorageFileManager
from runtime_files.filesystem.memory import MemoryFileManager
from runtime_files.filesystem.resolver import LocationResolver

__all__ = [
    # Config
    "FileManagerConfig",
    "StorageType",
    # Base classes
    "FileManager",
    "File",
    "DEFAULT_CONTENT_TYPE",
    "LocationResolver",
    # Managers
    "StorageFileManager",
    "LocalFileManager",
    "MemoryFileManager",
    # Classification
    "FileCategory",
    "classify",
    "is_module_file",
    "is_segment_file",
    "is_node_segment_file",
    "is_repository_segment_file",
    "is_generated_file",
    # Factory
    "get_file_manager",
    "create_file_manager",
    "register_file_manager",
    "list_storage_types",
    "is_storage_registered",
    # Exceptions
    "FileManagerError",
    "FileNotFound",
    "PathOutsideRootError",
    "StorageTypeNotFoundError",
    "FileManagerConfigurationError",
]
