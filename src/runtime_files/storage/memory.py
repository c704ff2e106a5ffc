"""
In-memory object-store backend.

Files live in a flat key space of absolute POSIX locations, the way an
object store keeps them. Directories only exist as key prefixes.
"""

import errno
import logging
import posixpath
import re
from typing import Optional

from runtime_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def translate_glob(pattern: str) -> str:
    """
    Translate a glob pattern into a regular expression.

    ``**`` as a whole path component matches zero or more directories,
    ``*`` and ``?`` never cross a ``/`` and ``[...]`` is a character class
    (``[!...]`` negated). Wildcards at the start of a component do not
    match a leading dot.

    Args:
        pattern: Glob pattern with ``/`` separators

    Returns:
        Regular expression source for use with ``re.fullmatch``
    """
    parts = pattern.split("/")
    regex = ""

    for index, part in enumerate(parts):
        is_last = index == len(parts) - 1

        if part == "**":
            if is_last:
                regex += r"(?:(?!\.)[^/]+(?:/(?!\.)[^/]+)*)?"
            else:
                regex += r"(?:(?!\.)[^/]+/)*"
            continue

        regex += _translate_component(part)
        if not is_last:
            regex += "/"

    return regex


def _translate_component(part: str) -> str:
    result = r"(?!\.)" if part[:1] in ("*", "?", "[") else ""
    i = 0

    while i < len(part):
        char = part[i]
        i += 1

        if char == "*":
            result += "[^/]*"
        elif char == "?":
            result += "[^/]"
        elif char == "[":
            end = part.find("]", i + 1 if part[i:i + 1] in ("!", "]") else i)
            if end == -1:
                result += re.escape(char)
                continue
            body = part[i:end].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            elif body.startswith("^"):
                body = "\\" + body
            result += f"[{body}]"
            i = end + 1
        else:
            result += re.escape(char)

    return result


class MemoryStorageBackend(StorageBackend):
    """
    Storage backend keeping file content in memory.

    Useful for tests and for runtimes that serve a generated tree without
    touching the disk. Directories are implicit: writing ``/a/b/c.txt``
    makes ``/a`` and ``/a/b`` exist.

    Usage:
        backend = MemoryStorageBackend({"/app/main.js": b"export {}"})
        manager = MemoryFileManager("/app", backend=backend)
    """

    def __init__(self, files: Optional[dict[str, bytes]] = None):
        self._files: dict[str, bytes] = dict(files or {})

    @property
    def files(self) -> dict[str, bytes]:
        """Snapshot of all stored files keyed by location."""
        return dict(self._files)

    def put(self, location: str, content: bytes) -> None:
        """Store a file synchronously, e.g. while seeding a tree."""
        self._files[location] = bytes(content)

    async def exists(self, location: str) -> bool:
        return location in self._files or self._is_directory(location)

    async def read_bytes(self, location: str) -> bytes:
        if location in self._files:
            return self._files[location]
        if self._is_directory(location):
            raise IsADirectoryError(errno.EISDIR, "Is a directory", location)
        raise FileNotFoundError(errno.ENOENT, "No such file or directory", location)

    async def write_bytes(self, location: str, content: bytes) -> None:
        if self._is_directory(location):
            raise IsADirectoryError(errno.EISDIR, "Is a directory", location)
        self._check_parents(location)
        self._files[location] = bytes(content)
        logger.debug(f"Wrote {len(content)} bytes to {location}")

    async def copy(self, source: str, destination: str) -> None:
        if source in self._files:
            self._check_parents(destination)
            self._files[destination] = self._files[source]
        elif self._is_directory(source):
            if destination in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", destination)
            self._check_parents(destination)
            prefix = source.rstrip("/") + "/"
            target = destination.rstrip("/") + "/"
            for key in [k for k in self._files if k.startswith(prefix)]:
                self._files[target + key[len(prefix):]] = self._files[key]
        else:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", source)
        logger.debug(f"Copied {source} to {destination}")

    async def remove(self, location: str) -> None:
        prefix = location.rstrip("/") + "/"
        for key in [k for k in self._files if k == location or k.startswith(prefix)]:
            del self._files[key]
        logger.debug(f"Removed {location}")

    async def glob(self, root: str, pattern: str) -> list[str]:
        # Normalize like a real path so "./" and "../" segments resolve
        full_pattern = posixpath.normpath(posixpath.join(root, pattern.lstrip("/")))
        prefix = root.rstrip("/") + "/"

        if full_pattern.startswith(prefix):
            regex = re.escape(prefix) + translate_glob(full_pattern[len(prefix):])
        else:
            regex = translate_glob(full_pattern)

        compiled = re.compile(regex)
        return [key for key in self._files if compiled.fullmatch(key)]

    def _check_parents(self, location: str) -> None:
        """Raise if any ancestor of the location is stored as a file."""
        parent = posixpath.dirname(location)

        while parent and parent != "/":
            if parent in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", location)
            parent = posixpath.dirname(parent)

    def _is_directory(self, location: str) -> bool:
        prefix = location.rstrip("/") + "/"
        return any(key.startswith(prefix) for key in self._files)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(files={len(self._files)})"
