"""Tests for the materialization facade."""

import pytest

from assetdeploy.domain.assets import AssetParams, PublishMode
from assetdeploy.domain.errors import InvalidAssetIdError, NotFoundError, PublishError
from assetdeploy.infrastructure.storage.driver import LocalFilesystemDriver
from assetdeploy.infrastructure.storage.stores import PublicStore, StagingStore
from assetdeploy.services.materialization_service import MaterializationService
from assetdeploy.services.minification import MinificationPolicy
from assetdeploy.services.path_resolver import PathResolver
from assetdeploy.services.publisher import Publisher


@pytest.fixture
def service(tmp_path):
    driver = LocalFilesystemDriver(fsync=False)
    staging = StagingStore(tmp_path / "staging", driver)
    public = PublicStore(tmp_path / "public", driver)
    staging.ensure_root()
    public.ensure_root()
    resolver = PathResolver(MinificationPolicy(enabled=True, extensions=["js", "css"]))
    return MaterializationService(staging, public, resolver=resolver)


class TestDeploy:
    """deploy_file / deploy_files."""

    def test_deploy_fresh_staging_file(self, service):
        service.staging.write("logo.png", b"\x89PNG")

        path = service.deploy_file("logo.png", {})

        assert path == "logo.png"
        assert service.public.is_file(path) is True

    def test_deploy_with_params(self, service):
        params = {"area": "frontend", "theme": "Magento/luma", "locale": "en_US", "publish": True}
        service.staging.write("frontend/Magento/luma/en_US/Magento_Ui/js/grid.js", b"grid")

        path = service.deploy_file("Magento_Ui::js/grid.js", params)

        assert path == "frontend/Magento/luma/en_US/Magento_Ui/js/grid.js"
        assert service.public.read(path) == b"grid"

    def test_deploy_accepts_asset_params(self, service):
        service.staging.write("adminhtml/css/a.css", b"a")
        assert service.deploy_file("css/a.css", AssetParams(area="adminhtml")) == "adminhtml/css/a.css"

    def test_deploy_missing_staged_file(self, service):
        with pytest.raises(PublishError):
            service.deploy_file("missing.js")

    def test_deploy_invalid_name(self, service):
        with pytest.raises(InvalidAssetIdError):
            service.deploy_file("../../etc/passwd")

    def test_deploy_files_continues_past_failures(self, service):
        service.staging.write("a.css", b"a")
        service.staging.write("c.css", b"c")

        report = service.deploy_files(["a.css", "missing.css", "../bad.css", "c.css"])

        assert report.deployed == ["a.css", "c.css"]
        assert [item.target for item in report.failures] == ["missing.css", "../bad.css"]
        assert [item.error_type for item in report.failures] == ["PublishError", "InvalidAssetIdError"]
        assert report.ok is False

    def test_deploy_with_symlink_publisher(self, service):
        service.publisher = Publisher(service.staging, service.public, PublishMode.SYMLINK)
        service.staging.write("js/app.js", b"app")

        path = service.deploy_file("js/app.js")

        assert service.public.is_symlink(path) is True


class TestDelete:
    """delete_file / delete_files."""

    def test_delete_nonexistent_twice(self, service):
        service.delete_file("frontend/missing")
        service.delete_file("frontend/missing")

    def test_delete_does_not_resolve_name(self, service):
        service.public.write("js/app.js", b"x")
        service.public.write("js/app.min.js", b"y")

        service.delete_file("js/app.js")

        assert service.public.exists("js/app.js") is False
        assert service.public.exists("js/app.min.js") is True

    def test_delete_symlink_keeps_staged_target(self, service):
        service.publisher = Publisher(service.staging, service.public, PublishMode.SYMLINK)
        service.staging.write("js/app.js", b"app")
        path = service.deploy_file("js/app.js")

        service.delete_file(path)

        assert service.public.exists(path) is False
        assert service.read_tmp_file("app.js", "js") == b"app"

    def test_delete_files_continues_past_failures(self, service):
        service.public.write("a/x.css", b"x")
        service.public.write("b/y.css", b"y")

        report = service.delete_files(["a", "../escape", "b/y.css", "missing"])

        assert report.deleted == ["a", "b/y.css", "missing"]
        assert [item.target for item in report.failures] == ["../escape"]
        assert report.failures[0].error_type == "PathEscapeError"
        assert service.public.exists("a") is False
        assert service.public.exists("b/y.css") is False


class TestPublicFileOperations:
    """read_file / write_file / copy_file / open_file."""

    def test_read_file_uses_minified_name(self, service):
        service.public.write("theme/js/app.min.js", b"minified")
        service.public.write("theme/js/app.js", b"plain")

        assert service.read_file("js/app.js", "theme") == b"minified"

    def test_read_file_missing_returns_none(self, service):
        assert service.read_file("js/app.js", "theme") is None

    def test_read_file_distinguishes_empty(self, service):
        service.public.write("theme/js/app.min.js", b"")
        assert service.read_file("js/app.js", "theme") == b""

    def test_write_file_resolves_without_minification(self, service):
        written = service.write_file("Vendor_Module::js/app.js", "theme", "alert(1)")

        assert written == 8
        assert service.public.read("theme/Vendor_Module/js/app.js") == b"alert(1)"

    def test_copy_file_applies_minification_to_both_sides(self, service):
        service.public.write("src/js/app.min.js", b"min")

        assert service.copy_file("js/app.js", "src", "dst") is True

        assert service.public.read("dst/js/app.min.js") == b"min"
        assert service.public.exists("dst/js/app.js") is False

    def test_copy_file_missing_source(self, service):
        with pytest.raises(NotFoundError):
            service.copy_file("js/app.js", "src", "dst")

    def test_open_file(self, service):
        with service.open_file("css/styles.less", "theme") as handle:
            handle.write(b"body{}")

        assert handle.closed
        assert service.public.read("theme/css/styles.css") == b"body{}"

    def test_open_file_over_published_symlink_keeps_staged_file(self, service):
        service.publisher = Publisher(service.staging, service.public, PublishMode.SYMLINK)
        service.staging.write("js/app.js", b"staged")
        path = service.deploy_file("js/app.js")

        with service.open_file("app.js", "js") as handle:
            handle.write(b"public")

        assert service.read_tmp_file("app.js", "js") == b"staged"
        assert service.public.is_symlink(path) is False
        assert service.public.read(path) == b"public"


class TestTmpFiles:
    """Staging round trip."""

    def test_write_then_read_tmp_round_trip(self, service):
        assert service.write_tmp_file("x.css", "/theme", "body{}") == 6
        assert service.read_tmp_file("x.css", "/theme") == b"body{}"

    def test_tmp_read_and_write_use_same_resolution(self, service):
        service.write_tmp_file("Vendor_Module::css/a.less", "frontend", "a{}")

        assert service.staging.read("frontend/Vendor_Module/css/a.css") == b"a{}"
        assert service.read_tmp_file("Vendor_Module::css/a.less", "frontend") == b"a{}"

    def test_read_tmp_missing(self, service):
        assert service.read_tmp_file("x.css", "theme") is None

    def test_nul_byte_in_name_rejected(self, service):
        with pytest.raises(InvalidAssetIdError):
            service.write_tmp_file("a\x00b.js", "", "x")
