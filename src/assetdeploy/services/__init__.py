"""Services layer - resolution, publishing and the materialization facade.

Exports are resolved lazily so importing a single service module does not
pull in the rest of the layer.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "MaterializationService": (
        "assetdeploy.services.materialization_service",
        "MaterializationService",
    ),
    "Publisher": ("assetdeploy.services.publisher", "Publisher"),
    "PathResolver": ("assetdeploy.services.path_resolver", "PathResolver"),
    "SourceNameResolver": ("assetdeploy.services.path_resolver", "SourceNameResolver"),
    "FILE_ID_SEPARATOR": ("assetdeploy.services.path_resolver", "FILE_ID_SEPARATOR"),
    "MinificationPolicy": ("assetdeploy.services.minification", "MinificationPolicy"),
    "AssetRepository": ("assetdeploy.services.asset_repository", "AssetRepository"),
    "StaticAssetRepository": (
        "assetdeploy.services.asset_repository",
        "StaticAssetRepository",
    ),
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    value = getattr(import_module(module_name), attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(__all__))
