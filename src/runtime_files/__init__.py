"""
Runtime Files - file access for a module-loading runtime.

This package maps logical filenames onto a rooted file tree and
discovers modules, segment configurations and assets by their naming
conventions.
"""

__version__ = "0.1.0"

from runtime_files.filesystem import (
    DEFAULT_CONTENT_TYPE,
    File,
    FileCategory,
    FileManager,
    FileManagerConfig,
    FileManagerError,
    FileNotFound,
    LocalFileManager,
    LocationResolver,
    MemoryFileManager,
    PathOutsideRootError,
    StorageType,
    StorageTypeNotFoundError,
    classify,
    create_file_manager,
    get_file_manager,
)

from runtime_files.storage import (
    ContentTypeResolver,
    LocalStorageBackend,
    MemoryStorageBackend,
    MimeTypesResolver,
    StorageBackend,
)

__all__ = [
    # Version
    "__version__",
    # Managers
    "FileManager",
    "LocalFileManager",
    "MemoryFileManager",
    "LocationResolver",
    "File",
    "DEFAULT_CONTENT_TYPE",
    # Config
    "FileManagerConfig",
    "StorageType",
    "create_file_manager",
    "get_file_manager",
    # Classification
    "FileCategory",
    "classify",
    # Storage
    "StorageBackend",
    "ContentTypeResolver",
    "LocalStorageBackend",
    "MemoryStorageBackend",
    "MimeTypesResolver",
    # Exceptions
    "FileManagerError",
    "FileNotFound",
    "PathOutsideRootError",
    "StorageTypeNotFoundError",
]
