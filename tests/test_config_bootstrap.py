"""Tests for settings and service wiring."""

import pytest
from pydantic import ValidationError

from assetdeploy.bootstrap import bootstrap, build_materialization_service
from assetdeploy.config import Settings
from assetdeploy.domain.assets import PublishMode


@pytest.fixture
def config(tmp_path):
    return Settings(assetdeploy_root=tmp_path / "deploy", io_fsync=False)


def test_store_paths_are_forced_under_root(config, tmp_path):
    root = (tmp_path / "deploy").resolve()
    assert config.assetdeploy_root == root
    assert config.staging_path == root / "var" / "view_preprocessed"
    assert config.public_path == root / "pub" / "static"


def test_store_path_escape_rejected(tmp_path):
    with pytest.raises(ValidationError):
        Settings(assetdeploy_root=tmp_path / "deploy", public_path="../../elsewhere")


def test_publish_mode_validation(tmp_path):
    config = Settings(assetdeploy_root=tmp_path, publish_mode=" SYMLINK ")
    assert config.publish_mode == "symlink"
    assert config.publish_mode_enum is PublishMode.SYMLINK
    with pytest.raises(ValidationError):
        Settings(assetdeploy_root=tmp_path, publish_mode="hardlink")


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ASSETDEPLOY_ROOT", str(tmp_path / "env_root"))
    monkeypatch.setenv("ASSETDEPLOY_PUBLISH_MODE", "symlink")
    monkeypatch.setenv("ASSETDEPLOY_MINIFY", "on")
    monkeypatch.setenv("ASSETDEPLOY_MINIFY_EXTENSIONS", "js")

    config = Settings()

    assert config.assetdeploy_root == (tmp_path / "env_root").resolve()
    assert config.publish_mode == "symlink"
    assert config.minify_enabled is True
    assert config.minify_extensions == ["js"]


def test_build_service_uses_settings(config):
    config.minify_enabled = True
    config.publish_mode = "symlink"

    service = build_materialization_service(config)

    assert service.staging.root == config.staging_path
    assert service.public.root == config.public_path
    assert service.publisher.mode is PublishMode.SYMLINK
    assert service.resolver.resolve_name("js/app.js", minified=True) == "js/app.min.js"
    assert not config.staging_path.exists()


def test_bootstrap_creates_directories_and_deploys(config):
    service = bootstrap(config)

    assert config.staging_path.is_dir()
    assert config.public_path.is_dir()

    service.write_tmp_file("logo.svg", "frontend", "<svg/>")
    path = service.deploy_file("logo.svg", {"area": "frontend"})
    assert service.public.is_file(path) is True


def test_bootstrap_is_idempotent(config):
    bootstrap(config)
    bootstrap(config)
    assert config.public_path.is_dir()
