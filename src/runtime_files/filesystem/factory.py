"""
File manager factory.

This module creates file managers from configuration. It supports
registering custom storage types and selecting them by type.
"""

from typing import Callable, Optional

from runtime_files.filesystem.base import FileManager
from runtime_files.filesystem.config import FileManagerConfig, StorageType
from runtime_files.filesystem.exceptions import StorageTypeNotFoundError
from runtime_files.filesystem.local import LocalFileManager
from runtime_files.filesystem.memory import MemoryFileManager
from runtime_files.storage.content_types import MimeTypesResolver


# Type alias for file manager factory functions
FileManagerFactory = Callable[[FileManagerConfig], FileManager]

# Registry of file manager factories
_STORAGE_REGISTRY: dict[StorageType, FileManagerFactory] = {}


def register_file_manager(
    storage_type: StorageType,
    factory: Optional[FileManagerFactory] = None,
) -> Callable[[FileManagerFactory], FileManagerFactory]:
    """
    Register a file manager factory for a given storage type.

    Can be used as a decorator or called directly.

    Example:
        ```python
        @register_file_manager(StorageType.LOCAL)
        def create_local(config: FileManagerConfig) -> FileManager:
            return LocalFileManager(config.root)
        ```

    Args:
        storage_type: The storage type to register
        factory: Optional factory function (if not using as decorator)

    Returns:
        The factory function (for decorator use)
    """

    def decorator(func: FileManagerFactory) -> FileManagerFactory:
        _STORAGE_REGISTRY[storage_type] = func
        return func

    if factory is not None:
        return decorator(factory)
    return decorator


def get_file_manager(config: FileManagerConfig) -> FileManager:
    """
    Create a file manager based on configuration.

    Args:
        config: Configuration specifying root and storage type

    Returns:
        A FileManager instance

    Raises:
        StorageTypeNotFoundError: If the storage type is not registered
    """
    factory = _STORAGE_REGISTRY.get(config.storage)
    if factory is None:
        available = ", ".join(s.value for s in _STORAGE_REGISTRY.keys())
        raise StorageTypeNotFoundError(
            f"Unknown storage type: {config.storage.value}. "
            f"Available storage types: {available}",
            storage=config.storage.value,
        )

    return factory(config)


def create_file_manager(
    root: str = ".",
    storage: str | StorageType = StorageType.LOCAL,
    **kwargs,
) -> FileManager:
    """
    Convenience function to create a file manager with common defaults.

    Args:
        root: Root location of the file tree
        storage: Storage type (string or enum)
        **kwargs: Additional FileManagerConfig parameters

    Returns:
        A FileManager instance

    Example:
        ```python
        manager = create_file_manager("./dist")
        scratch = create_file_manager("/app", storage="memory")
        ```
    """
    if isinstance(storage, str):
        storage = StorageType(storage)

    config = FileManagerConfig(root=root, storage=storage, **kwargs)

    return get_file_manager(config)


def _manager_options(config: FileManagerConfig) -> dict:
    return {
        "content_types": MimeTypesResolver(config.extra_content_types),
        "module_extension": config.module_extension,
        "config_extension": config.config_extension,
    }


# Register built-in storage types
@register_file_manager(StorageType.LOCAL)
def _create_local_file_manager(config: FileManagerConfig) -> FileManager:
    """Create a file manager on the local disk."""
    return LocalFileManager(config.root, **_manager_options(config))


@register_file_manager(StorageType.MEMORY)
def _create_memory_file_manager(config: FileManagerConfig) -> FileManager:
    """Create an empty in-memory file manager."""
    return MemoryFileManager(config.root, **_manager_options(config))


def list_storage_types() -> list[str]:
    """List all registered storage types."""
    return [s.value for s in _STORAGE_REGISTRY.keys()]


def is_storage_registered(storage_type: StorageType) -> bool:
    """Check if a storage type is registered."""
    return storage_type in _STORAGE_REGISTRY
