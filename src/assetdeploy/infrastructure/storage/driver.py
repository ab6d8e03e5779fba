"""Local filesystem driver.

Every method takes an absolute path that the owning store has already
checked against its root. ``OSError`` is translated to ``FileSystemError``
carrying the path and operation name.
"""

from __future__ import annotations

import os
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from assetdeploy.domain.errors import FileSystemError
from assetdeploy.infrastructure.storage.io_atomic import (
    ensure_parent_dir,
    fsync_enabled,
    replace_atomic,
    symlink_atomic,
    write_bytes_atomic,
)

PathLike = Union[str, Path]


@contextmanager
def _translate(path: PathLike, operation: str) -> Iterator[None]:
    try:
        yield
    except FileSystemError:
        raise
    except OSError as exc:
        raise FileSystemError(exc.strerror or str(exc), str(path), operation) from exc


class LocalFilesystemDriver:
    """Primitive file operations on the local filesystem."""

    def __init__(self, *, fsync: bool | None = None):
        """Initialize the driver.

        Args:
            fsync: Force fsync on atomic writes on/off. ``None`` follows the
                ``ASSETDEPLOY_IO_FSYNC`` environment setting.
        """
        self._fsync = fsync

    @property
    def fsync(self) -> bool:
        return fsync_enabled() if self._fsync is None else self._fsync

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        """True for any directory entry, including dangling symlinks."""
        return os.path.lexists(path)

    def is_symlink(self, path: PathLike) -> bool:
        return os.path.islink(path)

    def is_file(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def is_directory(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def same_volume(self, first: PathLike, second: PathLike) -> bool:
        """Whether two existing paths live on the same device."""
        with _translate(first, "stat"):
            return os.stat(first).st_dev == os.stat(second).st_dev

    # -------------------------------------------------------------------------
    # Read / write
    # -------------------------------------------------------------------------

    def read_file(self, path: PathLike) -> bytes:
        with _translate(path, "read"):
            with open(path, "rb") as handle:
                return handle.read()

    def write_file(self, path: PathLike, data: bytes, *, atomic: bool = False) -> int:
        """Write bytes, creating parent directories.

        Args:
            path: Absolute target path
            data: Content to write
            atomic: Use temp file + rename

        Returns:
            Number of bytes written
        """
        with _translate(path, "write"):
            if atomic:
                return write_bytes_atomic(path, data, fsync=self.fsync)
            ensure_parent_dir(path)
            with open(path, "wb") as handle:
                return handle.write(data)

    @contextmanager
    def open_file(self, path: PathLike, mode: str = "w+b") -> Iterator[BinaryIO]:
        """Open a file for writing; the handle is flushed and closed on exit."""
        with _translate(path, "open"):
            ensure_parent_dir(path)
            handle = open(path, mode)
        try:
            yield handle
        finally:
            with _translate(path, "close"):
                try:
                    if not handle.closed:
                        handle.flush()
                finally:
                    handle.close()

    def copy_file(self, source: PathLike, target: PathLike, *, atomic: bool = True) -> bool:
        with _translate(target, "copy"):
            if not atomic:
                ensure_parent_dir(target)
                shutil.copyfile(source, target)
                return True

            do_fsync = self.fsync

            def _fill(tmp_path: str) -> None:
                shutil.copyfile(source, tmp_path)
                shutil.copymode(source, tmp_path)
                if do_fsync:
                    with open(tmp_path, "rb") as handle:
                        os.fsync(handle.fileno())

            replace_atomic(target, _fill, mode=None)
            return True

    def symlink(self, source: PathLike, target: PathLike) -> None:
        with _translate(target, "symlink"):
            symlink_atomic(source, target)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_file(self, path: PathLike) -> None:
        """Remove a file or a symlink entry (never its target)."""
        with _translate(path, "delete_file"):
            os.unlink(path)

    def delete_directory(self, path: PathLike) -> None:
        with _translate(path, "delete_directory"):
            shutil.rmtree(path)
