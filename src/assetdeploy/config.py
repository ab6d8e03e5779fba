"""assetdeploy configuration settings."""

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assetdeploy.domain.assets import PublishMode
from assetdeploy.infrastructure.config.settings_utils import (
    env_bool,
    env_list,
    env_str,
)
from assetdeploy.infrastructure.logging_setup import configure_logging
from assetdeploy.infrastructure.storage.path_guard import (
    ensure_within_root,
    normalize_path,
    safe_join,
)


class Settings(BaseSettings):
    """Application settings with env var support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Rooted store paths (both must remain inside assetdeploy_root)
    assetdeploy_root: Path = Field(
        default_factory=lambda: Path(env_str("ASSETDEPLOY_ROOT", ".assetdeploy"))
    )
    staging_path: Path = Field(
        default_factory=lambda: Path(env_str("ASSETDEPLOY_STAGING_PATH", "var/view_preprocessed"))
    )
    public_path: Path = Field(
        default_factory=lambda: Path(env_str("ASSETDEPLOY_PUBLIC_PATH", "pub/static"))
    )

    # Publishing
    publish_mode: str = Field(
        default_factory=lambda: env_str("ASSETDEPLOY_PUBLISH_MODE", PublishMode.COPY.value)
    )
    io_fsync: bool = Field(default_factory=lambda: env_bool("ASSETDEPLOY_IO_FSYNC", True))

    # Name resolution
    file_id_separator: str = "::"
    minify_enabled: bool = Field(default_factory=lambda: env_bool("ASSETDEPLOY_MINIFY", False))
    minify_extensions: list[str] = Field(
        default_factory=lambda: env_list("ASSETDEPLOY_MINIFY_EXTENSIONS", default=["js", "css", "html"])
    )
    minify_excludes: list[str] = Field(
        default_factory=lambda: env_list("ASSETDEPLOY_MINIFY_EXCLUDES")
    )

    # Observability
    log_level: str = Field(default_factory=lambda: env_str("ASSETDEPLOY_LOG_LEVEL", "INFO"))
    log_json: bool = Field(default_factory=lambda: env_bool("ASSETDEPLOY_LOG_JSON", False))

    @field_validator("publish_mode")
    @classmethod
    def _validate_publish_mode(cls, value: str) -> str:
        return PublishMode.parse(value).value

    def _resolve_under_root(self, value: Path) -> Path:
        root = normalize_path(self.assetdeploy_root)
        raw = Path(value)
        if raw.is_absolute():
            return ensure_within_root(root, raw)
        if not raw.parts:
            return root
        return safe_join(root, *raw.parts)

    def _normalize_runtime_paths(self) -> None:
        self.assetdeploy_root = normalize_path(self.assetdeploy_root)
        self.staging_path = self._resolve_under_root(self.staging_path)
        self.public_path = self._resolve_under_root(self.public_path)

    @model_validator(mode="after")
    def _normalize_paths_validator(self) -> "Settings":
        self._normalize_runtime_paths()
        return self

    @property
    def publish_mode_enum(self) -> PublishMode:
        return PublishMode.parse(self.publish_mode)

    def setup_logging(self) -> None:
        configure_logging(level=self.log_level, json_logs=self.log_json)

    def ensure_directories(self) -> None:
        """Ensure the staging and public roots exist."""
        self._normalize_runtime_paths()
        for path in (self.assetdeploy_root, self.staging_path, self.public_path):
            path.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
