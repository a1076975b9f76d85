"""Unit tests for build settings."""

import tempfile
from pathlib import Path

from fwbuild.config import ALL_ARCHITECTURES, BuildSettings, DistributionMode
from fwbuild.config.frameworks import REAL_FRAMEWORK_NAMES, real_framework_name
from fwbuild.config.settings import DEFAULT_XCODEBUILD, default_cache_dir, default_xcodebuild


class TestDistributionMode:
    """Test cases for DistributionMode."""

    def test_zip_mode(self):
        """The default mode has no cache namespace."""
        assert DistributionMode.ZIP.cache_subdir == ""
        assert DistributionMode.ZIP.marker_flag == "-DFIREBASE_BUILD_ZIP_FILE"

    def test_carthage_mode(self):
        """Test the Carthage namespace and marker."""
        assert DistributionMode.CARTHAGE.cache_subdir == "carthage"
        assert DistributionMode.CARTHAGE.marker_flag == "-DFIREBASE_BUILD_CARTHAGE"


class TestBuildSettings:
    """Test cases for BuildSettings."""

    def test_defaults(self, tmp_path, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("FWBUILD_XCODEBUILD", raising=False)
        settings = BuildSettings(project_dir=tmp_path)

        assert settings.project_dir == tmp_path.resolve()
        assert settings.architectures == ALL_ARCHITECTURES
        assert settings.distribution_mode is DistributionMode.ZIP
        assert settings.xcodebuild_path == DEFAULT_XCODEBUILD
        assert settings.verbose is False

    def test_architectures_default_is_not_shared(self, tmp_path):
        """Each settings object gets its own architecture list."""
        first = BuildSettings(project_dir=tmp_path)
        first.architectures.pop()
        second = BuildSettings(project_dir=tmp_path)
        assert second.architectures == ALL_ARCHITECTURES

    def test_workspace_and_pods_paths(self, tmp_path):
        """Test derived project paths."""
        settings = BuildSettings(project_dir=tmp_path)
        assert settings.workspace_path == tmp_path.resolve() / "FrameworkMaker.xcworkspace"
        assert settings.pods_dir == tmp_path.resolve() / "Pods"

    def test_resolved_directories_default(self, tmp_path, monkeypatch):
        """Unset directories fall back to defaults."""
        monkeypatch.delenv("FWBUILD_CACHE_DIR", raising=False)
        settings = BuildSettings(project_dir=tmp_path)

        temp_root = Path(tempfile.gettempdir())
        assert settings.resolved_logs_dir() == temp_root / "build_logs"
        assert settings.resolved_output_dir() == temp_root / "frameworks_being_built"
        assert settings.resolved_cache_dir() == Path.home() / ".fwbuild" / "cache"

    def test_resolved_directories_override(self, tmp_path):
        """Explicit directories win over defaults."""
        settings = BuildSettings(
            project_dir=tmp_path,
            logs_dir=tmp_path / "logs",
            cache_dir=tmp_path / "cache",
            output_dir=tmp_path / "out",
        )
        assert settings.resolved_logs_dir() == tmp_path / "logs"
        assert settings.resolved_cache_dir() == tmp_path / "cache"
        assert settings.resolved_output_dir() == tmp_path / "out"

    def test_cache_dir_env_override(self, tmp_path, monkeypatch):
        """Test cache directory override via environment variable."""
        monkeypatch.setenv("FWBUILD_CACHE_DIR", str(tmp_path / "custom_cache"))
        assert default_cache_dir() == (tmp_path / "custom_cache").resolve()

    def test_xcodebuild_env_override(self, monkeypatch):
        """Test toolchain override via environment variable."""
        monkeypatch.setenv("FWBUILD_XCODEBUILD", "/opt/xcode/usr/bin/xcodebuild")
        assert default_xcodebuild() == Path("/opt/xcode/usr/bin/xcodebuild")


class TestRealFrameworkName:
    """Test cases for the product name table."""

    def test_remapped_names(self):
        """Test known targets with different product names."""
        assert real_framework_name("PromisesObjC") == "FBLPromises"
        assert real_framework_name("Protobuf") == "protobuf"

    def test_identity_default(self):
        """Other names pass through unchanged."""
        assert real_framework_name("FirebaseCore") == "FirebaseCore"
        assert real_framework_name("promisesobjc") == "promisesobjc"

    def test_table_contents(self):
        """Test the table holds exactly the known exceptions."""
        assert REAL_FRAMEWORK_NAMES == {"PromisesObjC": "FBLPromises", "Protobuf": "protobuf"}
