"""
Location resolution for rooted file trees.

Maps logical filenames onto physical locations beneath a fixed root and
back again.
"""

import logging
import os
import posixpath
from pathlib import PurePath, PurePosixPath
from typing import Union

from runtime_files.filesystem.exceptions import PathOutsideRootError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class LocationResolver:
    """
    Resolves logical filenames against a fixed root location.

    A logical filename is either root-relative (``src/app.js``) or already
    absolute (``/srv/app/src/app.js``). Absolute filenames are taken as-is
    and only canonicalized, so identifiers that were resolved once can be
    passed through again without being joined onto the root a second time.

    The resolver does not enforce containment: ``../`` segments and absolute
    filenames may point outside the root. Callers that need sandboxing use
    ``get_contained_location`` instead.

    Usage:
        resolver = LocationResolver("/srv/app")

        resolver.get_absolute_location("src/app.js")   # /srv/app/src/app.js
        resolver.get_relative_location("/srv/app/src/app.js")   # src/app.js
    """

    def __init__(self, root: PathLike, follow_symlinks: bool = True):
        """
        Initialize the resolver.

        Args:
            root: Root location all relative filenames resolve against
            follow_symlinks: Resolve symbolic links on the local disk. Disable
                for backends without a real filesystem, which then get pure
                POSIX normalization.
        """
        self._root = os.fspath(root)
        self._follow_symlinks = follow_symlinks

    @property
    def root(self) -> str:
        """The root location as configured."""
        return self._root

    @property
    def separator(self) -> str:
        return os.sep if self._follow_symlinks else "/"

    def canonicalize(self, location: str) -> str:
        """Return the absolute, normalized form of a location."""
        if self._follow_symlinks:
            return os.path.realpath(os.path.abspath(location))
        return posixpath.normpath("/" + location.replace("\\", "/").lstrip("/"))

    def is_absolute(self, filename: str) -> bool:
        """Check if a logical filename is already rooted."""
        return filename.startswith("/") or filename.startswith(self.separator)

    def get_root_location(self) -> str:
        """Return the canonical form of the root location."""
        return self.canonicalize(self._root)

    def get_absolute_location(self, filename: str) -> str:
        """
        Resolve a logical filename to its physical location.

        No existence check is made; a location that does not exist is a
        valid result.

        Args:
            filename: Root-relative or absolute logical filename

        Returns:
            Canonical absolute location
        """
        if self.is_absolute(filename):
            location = filename
        elif self._follow_symlinks:
            location = os.path.join(self._root, filename)
        else:
            location = posixpath.join(self._root, filename)

        return self.canonicalize(location)

    def get_relative_location(self, location: str) -> str:
        """
        Return a physical location relative to the root.

        The result starts with ``..`` when the location lies outside the root.
        """
        if self._follow_symlinks:
            location = os.path.abspath(location)
            # Paths reached through a symlinked root only match once resolved
            if not self.is_within_root(location):
                location = self.canonicalize(location)
            return os.path.relpath(location, self.get_root_location())
        return posixpath.relpath(
            self.canonicalize(location), self.get_root_location()
        )

    def is_within_root(self, location: str) -> bool:
        """Check if a physical location lies at or beneath the root."""
        path_type = PurePath if self._follow_symlinks else PurePosixPath
        try:
            path_type(location).relative_to(path_type(self.get_root_location()))
            return True
        except ValueError:
            return False

    def get_contained_location(self, filename: str) -> str:
        """
        Resolve a logical filename and require it to stay beneath the root.

        Args:
            filename: Root-relative or absolute logical filename

        Returns:
            Canonical absolute location

        Raises:
            PathOutsideRootError: If the location escapes the root
        """
        location = self.get_absolute_location(filename)

        if not self.is_within_root(location):
            logger.warning(f"Rejected location outside root: {location}")
            raise PathOutsideRootError(filename)

        return location

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={self._root!r})"
