"""Shared fixtures for build component tests."""

from pathlib import Path

import pytest

from fake_toolchain import FakeToolchain
from fwbuild.config import BuildSettings


@pytest.fixture
def fake_toolchain():
    """Create a succeeding fake toolchain."""
    return FakeToolchain()


@pytest.fixture
def settings(tmp_path):
    """Create build settings rooted in a temporary directory."""
    return BuildSettings(
        project_dir=tmp_path / "project",
        output_dir=tmp_path / "frameworks_being_built",
        logs_dir=tmp_path / "logs",
        cache_dir=tmp_path / "cache",
        xcodebuild_path=Path("/usr/bin/xcodebuild"),
    )
