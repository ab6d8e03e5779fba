"""Minified file name convention."""

from __future__ import annotations

import fnmatch
import posixpath
from typing import Iterable, Optional

MINIFIED_MARKER = "min"


class MinificationPolicy:
    """Decides whether a file name gets the ``.min`` marker.

    The marker is inserted before the last extension (``app.js`` ->
    ``app.min.js``) when minification is enabled for that extension, the
    name does not already carry it, and no exclude pattern matches.
    """

    def __init__(
        self,
        *,
        enabled: bool = False,
        extensions: Iterable[str] = ("js", "css", "html"),
        excludes: Optional[Iterable[str]] = None,
        marker: str = MINIFIED_MARKER,
    ):
        self.enabled = bool(enabled)
        self.extensions = frozenset(ext.strip().lstrip(".").lower() for ext in extensions if ext.strip())
        self.excludes = tuple(pattern for pattern in (excludes or ()) if pattern)
        self.marker = marker

    def is_enabled(self, extension: str) -> bool:
        return self.enabled and extension.lower() in self.extensions

    def is_minified(self, file_name: str) -> bool:
        stem, extension = posixpath.splitext(file_name)
        return bool(extension) and stem.endswith("." + self.marker)

    def is_excluded(self, file_name: str) -> bool:
        return any(fnmatch.fnmatchcase(file_name, pattern) for pattern in self.excludes)

    def add_minified_sign(self, file_name: str) -> str:
        stem, extension = posixpath.splitext(file_name)
        if not extension or not self.is_enabled(extension[1:]):
            return file_name
        if self.is_minified(file_name) or self.is_excluded(file_name):
            return file_name
        return f"{stem}.{self.marker}{extension}"
