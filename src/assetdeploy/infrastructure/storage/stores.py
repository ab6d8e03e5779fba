"""Root-scoped stores for the staging and public asset trees.

Each store owns one root directory and one driver. Callers address files by
slash-separated paths relative to the root; every call re-checks that the
path stays inside the root before touching the filesystem.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

import structlog

from assetdeploy.domain.errors import FileSystemError, NotFoundError, PathEscapeError
from assetdeploy.infrastructure.storage.driver import LocalFilesystemDriver
from assetdeploy.infrastructure.storage.path_guard import (
    InvalidArtifactPathError,
    ensure_parent_within_root,
    normalize_path,
    normalize_relative_path,
    safe_join,
)

logger = structlog.get_logger()

Content = Union[bytes, str]


def _as_bytes(content: Content) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content or b"")


class AssetStore:
    """Read/write access to a single root directory."""

    name = "asset"

    def __init__(
        self,
        root: Union[str, Path],
        driver: Optional[LocalFilesystemDriver] = None,
    ):
        self._root = normalize_path(root)
        self._driver = driver or LocalFilesystemDriver()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def driver(self) -> LocalFilesystemDriver:
        return self._driver

    def ensure_root(self) -> None:
        """Create the root directory if missing."""
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(str(exc), str(self._root), "mkdir") from exc

    def absolute_path(self, rel_path: str) -> Path:
        """Map a relative path to an absolute one under the root."""
        try:
            normalized = normalize_relative_path(rel_path)
            if not normalized:
                return self._root
            return ensure_parent_within_root(
                self._root, safe_join(self._root, *normalized.split("/"))
            )
        except InvalidArtifactPathError as exc:
            raise PathEscapeError(str(exc), str(rel_path), "resolve") from exc

    def exists(self, rel_path: str) -> bool:
        return self._driver.exists(self.absolute_path(rel_path))

    def read(self, rel_path: str) -> Optional[bytes]:
        """Read a file.

        Returns:
            File content, or ``None`` when no regular file exists at the path.
            An empty file yields ``b""``.
        """
        full_path = self.absolute_path(rel_path)
        if not self._driver.is_file(full_path):
            logger.debug("store_read_miss", store=self.name, path=rel_path)
            return None
        return self._driver.read_file(full_path)

    def write(self, rel_path: str, content: Content) -> int:
        """Write content, creating parent directories. Returns bytes written."""
        full_path = self.absolute_path(rel_path)
        self._reject_root(full_path, rel_path, "write")
        written = self._driver.write_file(full_path, _as_bytes(content), atomic=self._atomic_writes())
        logger.debug("store_write", store=self.name, path=rel_path, bytes=written)
        return written

    @contextmanager
    def open_for_write(self, rel_path: str, mode: str = "w+b") -> Iterator[BinaryIO]:
        """Scoped write handle; released on every exit path."""
        full_path = self.absolute_path(rel_path)
        self._reject_root(full_path, rel_path, "open")
        with self._driver.open_file(full_path, mode) as handle:
            yield handle

    def _atomic_writes(self) -> bool:
        return False

    def _reject_root(self, full_path: Path, rel_path: str, operation: str) -> None:
        if full_path == self._root:
            raise FileSystemError(f"refusing to {operation} the {self.name} store root", rel_path, operation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={str(self._root)!r})"


class StagingStore(AssetStore):
    """Scratch area where generated assets are materialized before publishing.

    Writes go straight to the final name; nothing outside the deployment
    reads from staging while it is being filled.
    """

    name = "staging"


class PublicStore(AssetStore):
    """The publicly served asset tree."""

    name = "public"

    def _atomic_writes(self) -> bool:
        return True

    def _require(self, rel_path: str) -> Path:
        full_path = self.absolute_path(rel_path)
        if not self._driver.exists(full_path):
            raise NotFoundError(rel_path, self.name)
        return full_path

    @contextmanager
    def open_for_write(self, rel_path: str, mode: str = "w+b") -> Iterator[BinaryIO]:
        """Scoped write handle on the public entry itself.

        A published symlink is unlinked first so writing never reaches the
        staged file it points at.
        """
        full_path = self.absolute_path(rel_path)
        self._reject_root(full_path, rel_path, "open")
        if self._driver.is_symlink(full_path):
            self._driver.delete_file(full_path)
        with self._driver.open_file(full_path, mode) as handle:
            yield handle

    def is_symlink(self, rel_path: str) -> bool:
        return self._driver.is_symlink(self._require(rel_path))

    def is_file(self, rel_path: str) -> bool:
        return self._driver.is_file(self._require(rel_path))

    def is_directory(self, rel_path: str) -> bool:
        return self._driver.is_directory(self._require(rel_path))

    def copy(self, source: str, target: str) -> bool:
        """Copy one file to another location inside the public tree."""
        source_path = self.absolute_path(source)
        target_path = self.absolute_path(target)
        self._reject_root(target_path, target, "copy")
        if not self._driver.is_file(source_path):
            raise NotFoundError(source, self.name)
        copied = self._driver.copy_file(source_path, target_path)
        logger.debug("public_copy", source=source, target=target)
        return copied

    def delete(self, rel_path: str) -> None:
        """Remove exactly the entity at ``rel_path``.

        Missing paths are a no-op. A symlink is unlinked without touching its
        target; the symlink check must run before the file check because
        ``is_file`` follows links. Anything else that is not a regular file
        is removed as a directory tree.
        """
        full_path = self.absolute_path(rel_path)
        self._reject_root(full_path, rel_path, "delete")
        if not self._driver.exists(full_path):
            return
        if self._driver.is_symlink(full_path):
            self._driver.delete_file(full_path)
            kind = "symlink"
        elif self._driver.is_file(full_path):
            self._driver.delete_file(full_path)
            kind = "file"
        else:
            self._driver.delete_directory(full_path)
            kind = "directory"
        logger.info("public_path_deleted", path=rel_path, kind=kind)

    def replace_with_copy(self, source: Path, rel_path: str) -> None:
        """Atomically replace the entry at ``rel_path`` with a copy of ``source``."""
        target = self.absolute_path(rel_path)
        self._reject_root(target, rel_path, "publish")
        self._driver.copy_file(source, target, atomic=True)

    def replace_with_symlink(self, source: Path, rel_path: str) -> None:
        """Atomically replace the entry at ``rel_path`` with a link to ``source``."""
        target = self.absolute_path(rel_path)
        self._reject_root(target, rel_path, "publish")
        self._driver.symlink(source, target)
