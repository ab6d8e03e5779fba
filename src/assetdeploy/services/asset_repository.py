"""Asset catalog used by deployments."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Union

from assetdeploy.domain.assets import AssetParams, StaticAsset
from assetdeploy.services.path_resolver import PathResolver

ParamsLike = Union[AssetParams, Mapping[str, Any], None]


class AssetRepository(Protocol):
    """Factory turning a resolved relative path into a deployable asset."""

    def create_asset(self, relative_path: str, params: ParamsLike = None) -> StaticAsset:
        ...


class StaticAssetRepository:
    """Default catalog: ``area/theme/locale/module/<file>`` layout.

    Generated assets are expected in the staging store under the same
    relative path they are published at.
    """

    def __init__(self, resolver: Optional[PathResolver] = None):
        self.resolver = resolver or PathResolver()

    def create_asset(self, relative_path: str, params: ParamsLike = None) -> StaticAsset:
        asset_params = AssetParams.from_mapping(params)
        path = self.resolver.prefix_with(asset_params, relative_path)
        return StaticAsset(path=path, source_path=path, params=asset_params)
