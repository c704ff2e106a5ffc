"""
Local disk storage backend.
"""

import asyncio
import errno
import glob
import logging
import os
import shutil
from pathlib import Path

import aiofiles
import aiofiles.os

from runtime_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorageBackend(StorageBackend):
    """
    Storage backend on the local filesystem.

    File content is read and written with aiofiles. Tree operations from
    shutil and glob expansion run in a worker thread, so callers on the
    event loop only suspend while the I/O completes.
    """

    async def exists(self, location: str) -> bool:
        return await aiofiles.os.path.exists(location)

    async def read_bytes(self, location: str) -> bytes:
        async with aiofiles.open(location, "rb") as f:
            return await f.read()

    async def write_bytes(self, location: str, content: bytes) -> None:
        await aiofiles.os.makedirs(os.path.dirname(location), exist_ok=True)

        async with aiofiles.open(location, "wb") as f:
            await f.write(content)
        logger.debug(f"Wrote {len(content)} bytes to {location}")

    async def copy(self, source: str, destination: str) -> None:
        await asyncio.to_thread(self._copy, Path(source), Path(destination))

    async def remove(self, location: str) -> None:
        await asyncio.to_thread(self._remove, Path(location))

    async def glob(self, root: str, pattern: str) -> list[str]:
        full_pattern = os.path.join(glob.escape(root), pattern.lstrip("/"))
        matches = await asyncio.to_thread(glob.glob, full_pattern, recursive=True)
        return [os.path.normpath(match) for match in matches]

    def _copy(self, source: Path, destination: Path) -> None:
        if not source.exists():
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(source))

        if source.is_dir():
            shutil.copytree(source, destination, dirs_exist_ok=True)
        else:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
        logger.debug(f"Copied {source} to {destination}")

    def _remove(self, path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
        logger.debug(f"Removed {path}")
