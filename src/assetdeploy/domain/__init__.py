"""Domain models for assetdeploy."""

from .assets import (
    AssetParams,
    DeletionReport,
    DeploymentReport,
    EntryFailure,
    LogicalAssetId,
    PublishedAsset,
    PublishMode,
    StaticAsset,
)
from .errors import (
    AssetDeployError,
    FileSystemError,
    InvalidAssetIdError,
    NotFoundError,
    PathEscapeError,
    PublishError,
)

__all__ = [
    "AssetParams",
    "DeletionReport",
    "DeploymentReport",
    "EntryFailure",
    "LogicalAssetId",
    "PublishedAsset",
    "PublishMode",
    "StaticAsset",
    # Errors
    "AssetDeployError",
    "FileSystemError",
    "InvalidAssetIdError",
    "NotFoundError",
    "PathEscapeError",
    "PublishError",
]
