"""Logical asset name to relative path resolution.

A logical name such as ``Vendor_Module::js/app.js`` is turned into a clean
store-relative path (``Vendor_Module/js/app.js``), optionally carrying the
minified marker and with preprocessor sources mapped to their output type.
Resolution is pure: no I/O and no state beyond the injected policies.
"""

from __future__ import annotations

import posixpath
from typing import Mapping, Optional

from assetdeploy.domain.assets import AssetParams, LogicalAssetId
from assetdeploy.domain.errors import InvalidAssetIdError
from assetdeploy.infrastructure.storage.path_guard import (
    InvalidArtifactPathError,
    normalize_relative_path,
)
from assetdeploy.services.minification import MinificationPolicy

FILE_ID_SEPARATOR = "::"

DEFAULT_SOURCE_EXTENSIONS = {
    "less": "css",
    "scss": "css",
    "sass": "css",
}


class SourceNameResolver:
    """Maps preprocessor source names to the name they publish under."""

    def __init__(self, extension_map: Optional[Mapping[str, str]] = None):
        source = DEFAULT_SOURCE_EXTENSIONS if extension_map is None else extension_map
        self.extension_map = {
            key.lower().lstrip("."): value.lstrip(".") for key, value in source.items()
        }

    def resolve(self, file_name: str) -> str:
        stem, extension = posixpath.splitext(file_name)
        target = self.extension_map.get(extension[1:].lower()) if extension else None
        if not target:
            return file_name
        return f"{stem}.{target}"


class PathResolver:
    """Resolve logical asset names into store-relative paths."""

    def __init__(
        self,
        minification: Optional[MinificationPolicy] = None,
        source_names: Optional[SourceNameResolver] = None,
        *,
        separator: str = FILE_ID_SEPARATOR,
    ):
        self.minification = minification or MinificationPolicy()
        self.source_names = source_names or SourceNameResolver()
        self.separator = separator

    def resolve_name(self, file_name: str, *, minified: bool = False) -> str:
        """Resolve a bare file name.

        Args:
            file_name: Logical name, may contain the file-id separator
            minified: Apply the minified marker (public read/copy variants)

        Returns:
            Relative path without ``..``, leading slash or empty segments

        Raises:
            InvalidAssetIdError: empty name or path traversal
        """
        raw = str(file_name or "").strip()
        if not raw:
            raise InvalidAssetIdError("asset file name is required")
        name = self.minification.add_minified_sign(raw) if minified else raw
        name = self.source_names.resolve(name)
        if self.separator:
            name = name.replace(self.separator, "/")
        resolved = self._normalize(name, original=raw)
        if not resolved:
            raise InvalidAssetIdError(f"asset file name resolves to nothing: {file_name!r}")
        return resolved

    def resolve(self, asset_id: LogicalAssetId, *, minified: bool = False) -> str:
        """Resolve an asset id to ``area/theme/locale/module/<name>``."""
        return self.prefix_with(
            asset_id.params, self.resolve_name(asset_id.file_name, minified=minified)
        )

    def prefix_with(self, params: AssetParams, relative_path: str) -> str:
        """Place an already resolved path under the deployment parameters."""
        path = self._normalize(relative_path, original=relative_path)
        if not path:
            raise InvalidAssetIdError("asset path is required")
        prefix = self._normalize("/".join(params.segments()), original=params)
        return f"{prefix}/{path}" if prefix else path

    def resolve_in(self, directory: str, file_name: str, *, minified: bool = False) -> str:
        """Resolve ``file_name`` under an explicit directory prefix."""
        name = self.resolve_name(file_name, minified=minified)
        prefix = self._normalize(directory, original=directory)
        return f"{prefix}/{name}" if prefix else name

    @staticmethod
    def _normalize(path: str, *, original: object) -> str:
        try:
            return normalize_relative_path(path.lstrip("/\\"))
        except InvalidArtifactPathError as exc:
            raise InvalidAssetIdError(f"invalid asset path {original!r}: {exc}") from exc
