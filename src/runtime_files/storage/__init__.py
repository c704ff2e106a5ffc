"""
Storage backends and content type resolvers used by file managers.
"""

from runtime_files.storage.base import ContentTypeResolver, StorageBackend
from runtime_files.storage.content_types import MimeTypesResolver
from runtime_files.storage.local import LocalStorageBackend
from runtime_files.storage.memory import MemoryStorageBackend, translate_glob

__all__ = [
    "StorageBackend",
    "ContentTypeResolver",
    "MimeTypesResolver",
    "LocalStorageBackend",
    "MemoryStorageBackend",
    "translate_glob",
]
