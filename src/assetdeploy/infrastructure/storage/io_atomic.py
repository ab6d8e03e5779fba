"""Atomic file replacement helpers.

Writers create a uniquely named sibling of the target, fill it and move it
into place with ``os.replace``. Concurrent writers of the same target each use
their own temporary name, so readers only ever observe a complete file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Union

from assetdeploy.infrastructure.config.settings_utils import env_bool


_FSYNC_ENV = "ASSETDEPLOY_IO_FSYNC"
_TMP_PREFIX = ".assetdeploy-"
_TMP_SUFFIX = ".tmp"

PathLike = Union[str, Path]


def _read_umask() -> int:
    # os.umask can only be read by setting it; do it once, before any writer threads.
    current = os.umask(0o022)
    os.umask(current)
    return current


DEFAULT_FILE_MODE = 0o666 & ~_read_umask()


def fsync_enabled() -> bool:
    """Check if fsync is enabled for atomic writes."""
    return env_bool(_FSYNC_ENV, default=True)


def ensure_parent_dir(path: PathLike) -> None:
    """Ensure parent directory exists."""
    parent = os.path.dirname(str(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def temp_sibling(path: PathLike) -> str:
    """Reserve a unique temporary name in the directory of ``path``."""
    target = str(path)
    fd, tmp_path = tempfile.mkstemp(
        prefix=_TMP_PREFIX + os.path.basename(target) + ".",
        suffix=_TMP_SUFFIX,
        dir=os.path.dirname(target) or ".",
    )
    os.close(fd)
    return tmp_path


def _discard(tmp_path: str) -> None:
    try:
        os.unlink(tmp_path)
    except FileNotFoundError:
        pass


def replace_atomic(
    path: PathLike,
    fill: Callable[[str], None],
    *,
    mode: int | None = DEFAULT_FILE_MODE,
) -> None:
    """Fill a temporary sibling via ``fill(tmp_path)`` then move it onto ``path``.

    ``mkstemp`` creates the sibling owner-only; it is switched to ``mode``
    (the regular umask default) before the rename. Pass ``mode=None`` when
    ``fill`` sets the permissions itself.
    The temporary file is removed when ``fill`` or the rename fails.
    """
    ensure_parent_dir(path)
    tmp_path = temp_sibling(path)
    try:
        fill(tmp_path)
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, str(path))
    except BaseException:
        _discard(tmp_path)
        raise


def write_bytes_atomic(path: PathLike, data: bytes, *, fsync: bool | None = None) -> int:
    """Write bytes atomically using a temp file and replace."""
    do_fsync = fsync_enabled() if fsync is None else fsync

    def _fill(tmp_path: str) -> None:
        with open(tmp_path, "wb") as handle:
            handle.write(data)
            handle.flush()
            if do_fsync:
                os.fsync(handle.fileno())

    replace_atomic(path, _fill)
    return len(data)


def symlink_atomic(source: PathLike, path: PathLike) -> None:
    """Point ``path`` at ``source``, replacing whatever entry was there."""
    ensure_parent_dir(path)
    tmp_path = temp_sibling(path)
    # mkstemp reserved the name as a file; the link takes its place.
    _discard(tmp_path)
    try:
        os.symlink(str(source), tmp_path)
        os.replace(tmp_path, str(path))
    except BaseException:
        if os.path.lexists(tmp_path):
            _discard(tmp_path)
        raise
