"""
Filename classification by suffix convention.

The runtime tells files apart by their names alone:

    plain.js                      module
    app.segment.json              segment configuration
    app.segment.local.js          node segment (generated)
    app.segment.repository.js     repository segment (generated)
    logo.local.png                generated variant of logo.png

All predicates here are pure string checks. They never touch the
filesystem.
"""

import posixpath
from enum import Enum

DEFAULT_MODULE_EXTENSION = "js"
DEFAULT_CONFIG_EXTENSION = "json"

SEGMENT_MARKER = "segment"
LOCAL_MARKER = "local"
REPOSITORY_MARKER = "repository"
REMOTE_MARKER = "remote"

GENERATED_MARKERS = (LOCAL_MARKER, REPOSITORY_MARKER, REMOTE_MARKER)


class FileCategory(str, Enum):
    """Semantic category of a file, derived from its name."""

    MODULE = "module"
    SEGMENT = "segment"
    NODE_SEGMENT = "node_segment"
    REPOSITORY_SEGMENT = "repository_segment"
    GENERATED = "generated"
    OTHER = "other"


def _suffixes(filename: str) -> list[str]:
    """Dot-separated suffixes of the basename, without the dots."""
    name = posixpath.basename(filename.replace("\\", "/"))
    if name.startswith("."):
        name = name[1:]
    return name.split(".")[1:]


def _ends_with(filename: str, *parts: str) -> bool:
    suffixes = _suffixes(filename)
    return len(suffixes) >= len(parts) and suffixes[-len(parts):] == list(parts)


def is_module_file(filename: str, module_extension: str = DEFAULT_MODULE_EXTENSION) -> bool:
    """Check if the filename is an executable module (``*.js``)."""
    return _ends_with(filename, module_extension)


def is_segment_file(filename: str, config_extension: str = DEFAULT_CONFIG_EXTENSION) -> bool:
    """Check if the filename is a segment configuration (``*.segment.json``)."""
    return _ends_with(filename, SEGMENT_MARKER, config_extension)


def is_node_segment_file(
    filename: str, module_extension: str = DEFAULT_MODULE_EXTENSION
) -> bool:
    """Check if the filename is a node segment (``*.segment.local.js``)."""
    return _ends_with(filename, SEGMENT_MARKER, LOCAL_MARKER, module_extension)


def is_repository_segment_file(
    filename: str, module_extension: str = DEFAULT_MODULE_EXTENSION
) -> bool:
    """Check if the filename is a repository segment (``*.segment.repository.js``)."""
    return _ends_with(filename, SEGMENT_MARKER, REPOSITORY_MARKER, module_extension)


def is_generated_file(filename: str) -> bool:
    """
    Check if the filename is a generated variant.

    A generated variant carries ``.local``, ``.repository`` or ``.remote``
    right before its final extension, e.g. ``logo.local.png`` or
    ``task.remote.js``. A single suffix (``local.png``) does not count.

    Args:
        filename: Logical or physical filename

    Returns:
        True if the name marks a tooling-generated file
    """
    suffixes = _suffixes(filename)
    return len(suffixes) >= 2 and suffixes[-2] in GENERATED_MARKERS


def classify(
    filename: str,
    module_extension: str = DEFAULT_MODULE_EXTENSION,
    config_extension: str = DEFAULT_CONFIG_EXTENSION,
) -> FileCategory:
    """
    Classify a filename into a single category.

    The most specific category wins: node and repository segments are
    reported as such rather than as generated variants or modules.
    """
    if is_node_segment_file(filename, module_extension):
        return FileCategory.NODE_SEGMENT
    if is_repository_segment_file(filename, module_extension):
        return FileCategory.REPOSITORY_SEGMENT
    if is_segment_file(filename, config_extension):
        return FileCategory.SEGMENT
    if is_generated_file(filename):
        return FileCategory.GENERATED
    if is_module_file(filename, module_extension):
        return FileCategory.MODULE
    return FileCategory.OTHER
