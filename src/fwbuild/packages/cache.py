"""Cache management for built frameworks.

Finished xcframeworks are kept in a cache keyed by target name, version and
distribution mode so unchanged frameworks need not be rebuilt.

Cache Structure:
    {cache_root}/
    ├── {name}/                       # Default (zip) distribution
    │   └── {version}/
    │       └── {real_name}.xcframework
    └── carthage/                     # Carthage distribution
        └── {name}/
            └── {version}/
                └── {real_name}.xcframework

The cache root is ~/.fwbuild/cache unless FWBUILD_CACHE_DIR is set or an
explicit root is passed in. Entries are replaced wholesale, never edited in
place. Concurrent builds of the same name and version are not supported.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..config.frameworks import XCFRAMEWORK_EXTENSION, real_framework_name
from ..config.settings import DistributionMode, default_cache_dir
from .fs_utils import safe_rmtree

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Raised when a framework cannot be stored in the cache."""
    pass


class FrameworkCache:
    """Manages the built-framework cache directory."""

    def __init__(self, cache_root: Optional[Path] = None):
        """Initialize cache manager.

        Args:
            cache_root: Cache root directory. If None, uses FWBUILD_CACHE_DIR
                or ~/.fwbuild/cache.
        """
        self.cache_root = Path(cache_root) if cache_root is not None else default_cache_dir()

    def framework_root(
        self,
        name: str,
        version: str,
        mode: DistributionMode = DistributionMode.ZIP
    ) -> Path:
        """Get the directory holding a cached framework version.

        Args:
            name: Framework (target) name
            version: Version string (e.g., '6.15.0')
            mode: Distribution mode namespace

        Returns:
            Path to {cache_root}/{mode subdir}/{name}/{version}
        """
        root = self.cache_root
        if mode.cache_subdir:
            root = root / mode.cache_subdir
        return root / name / version

    def cached_framework_path(
        self,
        name: str,
        version: str,
        mode: DistributionMode = DistributionMode.ZIP
    ) -> Path:
        """Get the path a framework is (or would be) cached at."""
        real_name = real_framework_name(name)
        return self.framework_root(name, version, mode) / f"{real_name}.{XCFRAMEWORK_EXTENSION}"

    def is_cached(
        self,
        name: str,
        version: str,
        mode: DistributionMode = DistributionMode.ZIP
    ) -> bool:
        """Check if a framework version is already in the cache."""
        return self.cached_framework_path(name, version, mode).exists()

    def prepare(
        self,
        name: str,
        version: str,
        mode: DistributionMode = DistributionMode.ZIP
    ) -> Path:
        """Create the directory a framework version will be cached in.

        Raises:
            CacheError: If the directory cannot be created
        """
        root = self.framework_root(name, version, mode)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"Could not create cache directory {root}: {e}") from e
        return root

    def store(
        self,
        name: str,
        version: str,
        built_framework: Path,
        mode: DistributionMode = DistributionMode.ZIP
    ) -> Path:
        """Move a freshly built framework into the cache.

        Any previously cached framework at the destination is removed first.
        The built framework is moved, not copied.

        Args:
            name: Framework (target) name
            version: Version string
            built_framework: Path to the built .xcframework
            mode: Distribution mode namespace

        Returns:
            Path to the cached framework

        Raises:
            CacheError: If any filesystem operation fails. The cache entry may
                be missing afterwards; rebuilding restores it.
        """
        root = self.framework_root(name, version, mode)
        destination = self.cached_framework_path(name, version, mode)

        try:
            # The move below requires the destination to be absent
            safe_rmtree(destination)
            root.mkdir(parents=True, exist_ok=True)
            shutil.move(str(built_framework), str(destination))
        except OSError as e:
            raise CacheError(
                f"Could not move built framework {built_framework} into the cache at {destination}: {e}"
            ) from e

        logger.info(f"Cached {name} {version} at {destination}")
        return destination
