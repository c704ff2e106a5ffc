"""
Content type lookup based on file extensions.
"""

import mimetypes
import posixpath
from typing import Optional

from runtime_files.storage.base import ContentTypeResolver


class MimeTypesResolver(ContentTypeResolver):
    """
    Content type resolver backed by the ``mimetypes`` registry.

    Extra mappings take precedence over the registry, e.g.
    ``{"js": "text/javascript"}``.
    """

    def __init__(self, extra_types: Optional[dict[str, str]] = None):
        self._registry = mimetypes.MimeTypes()
        self._extra_types = {
            extension.lower().lstrip("."): content_type
            for extension, content_type in (extra_types or {}).items()
        }

    def lookup(self, location: str) -> Optional[str]:
        extension = posixpath.splitext(location.replace("\\", "/"))[1].lower().lstrip(".")
        if extension in self._extra_types:
            return self._extra_types[extension]

        content_type, _ = self._registry.guess_type(location, strict=False)
        return content_type
