"""Storage infrastructure for assetdeploy.

Provides the filesystem driver, root-scoped stores and path guards.
"""

from .driver import LocalFilesystemDriver
from .io_atomic import symlink_atomic, write_bytes_atomic
from .path_guard import (
    InvalidArtifactPathError,
    ensure_parent_within_root,
    ensure_within_root,
    normalize_path,
    normalize_relative_path,
    safe_join,
)
from .stores import AssetStore, PublicStore, StagingStore

__all__ = [
    # Path guard
    "InvalidArtifactPathError",
    "ensure_parent_within_root",
    "ensure_within_root",
    "normalize_path",
    "normalize_relative_path",
    "safe_join",
    # Atomic I/O
    "symlink_atomic",
    "write_bytes_atomic",
    # Driver and stores
    "LocalFilesystemDriver",
    "AssetStore",
    "PublicStore",
    "StagingStore",
]
