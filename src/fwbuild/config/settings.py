"""Build settings for fwbuild.

Settings are plain values constructed once at startup and handed to the
components that need them. A couple of environment variables may relocate
machine-specific paths:

    FWBUILD_CACHE_DIR   Root of the built-framework cache
    FWBUILD_XCODEBUILD  Path to the xcodebuild executable
"""

import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .architectures import ALL_ARCHITECTURES, Architecture

DEFAULT_XCODEBUILD = Path("/usr/bin/xcodebuild")
DEFAULT_WORKSPACE_NAME = "FrameworkMaker.xcworkspace"


class DistributionMode(Enum):
    """How the built frameworks will be distributed.

    Each mode has its own cache namespace and compiler marker define so
    sources can tell the two builds apart.
    """

    ZIP = "zip"
    CARTHAGE = "carthage"

    @property
    def cache_subdir(self) -> str:
        """Cache namespace directory (empty for the default mode)."""
        return "carthage" if self is DistributionMode.CARTHAGE else ""

    @property
    def marker_flag(self) -> str:
        """Define added to OTHER_CFLAGS for this mode."""
        if self is DistributionMode.CARTHAGE:
            return "-DFIREBASE_BUILD_CARTHAGE"
        return "-DFIREBASE_BUILD_ZIP_FILE"


def default_cache_dir() -> Path:
    """Cache root, honoring FWBUILD_CACHE_DIR."""
    cache_env = os.environ.get("FWBUILD_CACHE_DIR")
    if cache_env:
        return Path(cache_env).resolve()
    return Path.home() / ".fwbuild" / "cache"


def default_xcodebuild() -> Path:
    """xcodebuild executable, honoring FWBUILD_XCODEBUILD."""
    xcodebuild_env = os.environ.get("FWBUILD_XCODEBUILD")
    if xcodebuild_env:
        return Path(xcodebuild_env)
    return DEFAULT_XCODEBUILD


def default_output_dir() -> Path:
    """Scratch directory frameworks are assembled in before caching."""
    return Path(tempfile.gettempdir()) / "frameworks_being_built"


def default_logs_dir() -> Path:
    return Path(tempfile.gettempdir()) / "build_logs"


@dataclass
class BuildSettings:
    """Settings shared by a framework build.

    Attributes:
        project_dir: Directory containing the Xcode workspace and Pods folder
        architectures: Architectures to build (defaults to all)
        distribution_mode: ZIP or CARTHAGE distribution
        logs_dir: Directory for build logs (None = temporary directory)
        cache_dir: Root of the framework cache (None = default location)
        output_dir: Scratch directory for assembly (None = temporary directory)
        xcodebuild_path: Toolchain executable
        workspace_name: Workspace file inside project_dir
        verbose: Echo toolchain output while it runs
    """

    project_dir: Path
    architectures: List[Architecture] = field(default_factory=lambda: list(ALL_ARCHITECTURES))
    distribution_mode: DistributionMode = DistributionMode.ZIP
    logs_dir: Optional[Path] = None
    cache_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    xcodebuild_path: Path = field(default_factory=default_xcodebuild)
    workspace_name: str = DEFAULT_WORKSPACE_NAME
    verbose: bool = False

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir).resolve()

    @property
    def workspace_path(self) -> Path:
        return self.project_dir / self.workspace_name

    @property
    def pods_dir(self) -> Path:
        """The Pods directory CocoaPods generated for the workspace."""
        return self.project_dir / "Pods"

    def resolved_logs_dir(self) -> Path:
        return self.logs_dir if self.logs_dir is not None else default_logs_dir()

    def resolved_cache_dir(self) -> Path:
        return self.cache_dir if self.cache_dir is not None else default_cache_dir()

    def resolved_output_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else default_output_dir()
