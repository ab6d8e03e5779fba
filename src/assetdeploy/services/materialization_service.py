"""Public facade for deploying and manipulating static assets by name.

Every operation is a straight composition of the path resolver, the two
stores and the publisher. Lower-level errors propagate unchanged; only the
batch helpers catch per-entry failures and keep going.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, BinaryIO, Iterable, Iterator, Mapping, Optional, Union

import structlog

from assetdeploy.domain.assets import (
    AssetParams,
    DeletionReport,
    DeploymentReport,
    EntryFailure,
)
from assetdeploy.domain.errors import AssetDeployError
from assetdeploy.infrastructure.storage.stores import PublicStore, StagingStore
from assetdeploy.services.asset_repository import AssetRepository, StaticAssetRepository
from assetdeploy.services.path_resolver import PathResolver
from assetdeploy.services.publisher import Publisher

logger = structlog.get_logger()

Content = Union[bytes, str]
ParamsLike = Union[AssetParams, Mapping[str, Any], None]


class MaterializationService:
    """Deploy, read, write, copy and delete static assets by logical name."""

    def __init__(
        self,
        staging: StagingStore,
        public: PublicStore,
        *,
        resolver: Optional[PathResolver] = None,
        publisher: Optional[Publisher] = None,
        repository: Optional[AssetRepository] = None,
    ):
        self.staging = staging
        self.public = public
        self.resolver = resolver or PathResolver()
        self.publisher = publisher or Publisher(staging, public)
        self.repository = repository or StaticAssetRepository(self.resolver)

    # -------------------------------------------------------------------------
    # Deployment
    # -------------------------------------------------------------------------

    def deploy_file(self, file_name: str, params: ParamsLike = None) -> str:
        """Publish a staged asset and return its public relative path."""
        asset = self.repository.create_asset(self.resolver.resolve_name(file_name), params)
        return self.publisher.publish(asset).path

    def deploy_files(self, file_names: Iterable[str], params: ParamsLike = None) -> DeploymentReport:
        """Deploy several assets; a failure only skips that one asset."""
        report = DeploymentReport()
        for file_name in file_names:
            try:
                report.deployed.append(self.deploy_file(file_name, params))
            except AssetDeployError as exc:
                logger.warning("deploy_entry_failed", file_name=file_name, error=str(exc))
                report.failures.append(
                    EntryFailure(target=file_name, error=str(exc), error_type=type(exc).__name__)
                )
        return report

    def delete_file(self, path: str) -> None:
        self.public.delete(path)

    def delete_files(self, paths: Iterable[str]) -> DeletionReport:
        """Delete several public paths, continuing past individual failures."""
        report = DeletionReport()
        for path in paths:
            try:
                self.public.delete(path)
                report.deleted.append(path)
            except AssetDeployError as exc:
                logger.warning("delete_entry_failed", path=path, error=str(exc))
                report.failures.append(
                    EntryFailure(target=path, error=str(exc), error_type=type(exc).__name__)
                )
        return report

    # -------------------------------------------------------------------------
    # Public store
    # -------------------------------------------------------------------------

    def read_file(self, file_name: str, file_path: str) -> Optional[bytes]:
        """Read the minified variant of ``file_name`` under ``file_path``.

        Returns ``None`` when no such file is published.
        """
        return self.public.read(self.resolver.resolve_in(file_path, file_name, minified=True))

    @contextmanager
    def open_file(self, file_name: str, file_path: str) -> Iterator[BinaryIO]:
        with self.public.open_for_write(self.resolver.resolve_in(file_path, file_name)) as handle:
            yield handle

    def write_file(self, file_name: str, file_path: str, content: Content) -> int:
        return self.public.write(self.resolver.resolve_in(file_path, file_name), content)

    def copy_file(self, file_name: str, source_path: str, target_path: str) -> bool:
        """Copy the minified variant of ``file_name`` between two directories."""
        return self.public.copy(
            self.resolver.resolve_in(source_path, file_name, minified=True),
            self.resolver.resolve_in(target_path, file_name, minified=True),
        )

    # -------------------------------------------------------------------------
    # Staging store
    # -------------------------------------------------------------------------

    def read_tmp_file(self, file_name: str, file_path: str) -> Optional[bytes]:
        return self.staging.read(self.resolver.resolve_in(file_path, file_name))

    def write_tmp_file(self, file_name: str, file_path: str, content: Content) -> int:
        return self.staging.write(self.resolver.resolve_in(file_path, file_name), content)
