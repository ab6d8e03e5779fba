"""Domain errors."""

from __future__ import annotations


class AssetDeployError(Exception):
    """Base error."""
    pass


class InvalidAssetIdError(AssetDeployError, ValueError):
    """Logical asset identifier is empty or escapes its root."""
    pass


class NotFoundError(AssetDeployError):
    """Path does not exist in the store it was queried against."""

    def __init__(self, path: str, store: str = ""):
        self.path = path
        self.store = store
        where = f" in {store} store" if store else ""
        super().__init__(f"path not found{where}: {path}")


class FileSystemError(AssetDeployError):
    """File I/O error with context."""

    def __init__(self, message: str, path: str = "", operation: str = ""):
        self.path = path
        self.operation = operation
        super().__init__(f"[{operation}] {path}: {message}" if operation else message)


class PathEscapeError(FileSystemError):
    """Path resolves outside the store root."""
    pass


class PublishError(AssetDeployError):
    """Publishing a staged asset failed.

    The underlying ``FileSystemError`` (or ``NotFoundError`` for a missing
    staged source) is chained as ``__cause__``.
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
