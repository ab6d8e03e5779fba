"""Bootstrap - wire a MaterializationService from settings.

Creates:
- staging and public store roots
- the resolver, publisher and asset catalog they share
"""

from typing import Optional

import structlog

from assetdeploy.config import Settings, settings as default_settings
from assetdeploy.infrastructure.storage.driver import LocalFilesystemDriver
from assetdeploy.infrastructure.storage.stores import PublicStore, StagingStore
from assetdeploy.services.asset_repository import StaticAssetRepository
from assetdeploy.services.materialization_service import MaterializationService
from assetdeploy.services.minification import MinificationPolicy
from assetdeploy.services.path_resolver import PathResolver
from assetdeploy.services.publisher import Publisher

logger = structlog.get_logger()


def build_materialization_service(config: Optional[Settings] = None) -> MaterializationService:
    """Construct the service and its collaborators without touching disk."""
    config = config or default_settings
    driver = LocalFilesystemDriver(fsync=config.io_fsync)
    staging = StagingStore(config.staging_path, driver)
    public = PublicStore(config.public_path, driver)
    resolver = PathResolver(
        MinificationPolicy(
            enabled=config.minify_enabled,
            extensions=config.minify_extensions,
            excludes=config.minify_excludes,
        ),
        separator=config.file_id_separator,
    )
    return MaterializationService(
        staging,
        public,
        resolver=resolver,
        publisher=Publisher(staging, public, config.publish_mode_enum),
        repository=StaticAssetRepository(resolver),
    )


def bootstrap(config: Optional[Settings] = None) -> MaterializationService:
    """Initialize logging and directories, then return a ready service.

    Safe to call multiple times (idempotent).
    """
    config = config or default_settings
    config.setup_logging()
    logger.info(
        "bootstrapping_assetdeploy",
        root=str(config.assetdeploy_root),
        publish_mode=config.publish_mode,
    )

    config.ensure_directories()
    service = build_materialization_service(config)

    logger.info("bootstrap_complete", staging=str(service.staging.root), public=str(service.public.root))
    return service


if __name__ == "__main__":
    bootstrap()
