"""Publish staged assets into the public tree."""

from __future__ import annotations

from typing import Optional, Union

import structlog

from assetdeploy.domain.assets import PublishedAsset, PublishMode, StaticAsset
from assetdeploy.domain.errors import FileSystemError, NotFoundError, PublishError
from assetdeploy.infrastructure.storage.stores import PublicStore, StagingStore

logger = structlog.get_logger()


class Publisher:
    """Copies or links a staged asset to its public path.

    Both strategies create the new entry under a temporary name next to the
    target and rename it into place, so repeated or concurrent publishes of
    the same asset replace the target without it ever being missing or
    partially written.
    """

    def __init__(
        self,
        staging: StagingStore,
        public: PublicStore,
        mode: Union[PublishMode, str] = PublishMode.COPY,
    ):
        self.staging = staging
        self.public = public
        self.mode = PublishMode.parse(mode)
        self._effective_mode: Optional[PublishMode] = None

    def effective_mode(self) -> PublishMode:
        """Strategy actually used; symlink falls back to copy across volumes."""
        if self._effective_mode is None:
            self._effective_mode = self._decide_mode()
        return self._effective_mode

    def _decide_mode(self) -> PublishMode:
        if self.mode is PublishMode.COPY:
            return PublishMode.COPY
        self.staging.ensure_root()
        self.public.ensure_root()
        if self.staging.driver.same_volume(self.staging.root, self.public.root):
            return PublishMode.SYMLINK
        logger.warning(
            "publish_symlink_unavailable",
            staging_root=str(self.staging.root),
            public_root=str(self.public.root),
            fallback=PublishMode.COPY.value,
        )
        return PublishMode.COPY

    def publish(self, asset: StaticAsset) -> PublishedAsset:
        """Make ``asset`` visible at ``asset.path`` in the public store.

        Raises:
            PublishError: staged source missing or any filesystem failure
        """
        try:
            source = self.staging.absolute_path(asset.source_path)
            if not self.staging.driver.is_file(source):
                raise NotFoundError(asset.source_path, self.staging.name)
            mode = self.effective_mode()
            if mode is PublishMode.SYMLINK:
                self.public.replace_with_symlink(source, asset.path)
            else:
                self.public.replace_with_copy(source, asset.path)
        except (FileSystemError, NotFoundError) as exc:
            logger.error(
                "publish_failed",
                path=asset.path,
                source=asset.source_path,
                error=str(exc),
            )
            raise PublishError(str(exc), asset.path) from exc

        published = PublishedAsset(path=asset.path, is_symlink=mode is PublishMode.SYMLINK)
        logger.info("asset_published", path=published.path, mode=mode.value)
        return published
