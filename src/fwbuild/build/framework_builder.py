"""
Framework building for fwbuild.

This module ties the build components together:
    cache lookup -> prepare cache directory -> assemble xcframework -> move into the cache

Example usage:
    settings = BuildSettings(project_dir=Path("~/FrameworkMaker").expanduser())
    builder = FrameworkBuilder(settings)
    path = builder.build_framework("FirebaseCore", "6.15.0")
    print(f"Framework: {path}")
"""

import logging
import time
from pathlib import Path
from typing import Optional

from ..config.settings import BuildSettings
from ..packages.cache import FrameworkCache
from .framework_assembler import FrameworkAssembler
from .orchestrator import BuildOrchestrator
from .process_executor import ProcessExecutor

logger = logging.getLogger(__name__)


class FrameworkBuilder:
    """
    Builds a multi-architecture framework and caches the result.

    Errors from any phase propagate unchanged:
    - BuildOrchestratorError: an architecture group failed to compile
    - FrameworkAssemblyError: scratch setup or -create-xcframework failed
    - CacheError: the cache directory could not be created or the built
      framework could not be moved into it
    """

    def __init__(
        self,
        settings: BuildSettings,
        cache: Optional[FrameworkCache] = None,
        executor: Optional[ProcessExecutor] = None,
        show_progress: bool = True
    ):
        """
        Initialize framework builder.

        Args:
            settings: Build settings
            cache: Framework cache (defaults to one rooted at settings.cache_dir)
            executor: Process executor shared by all toolchain invocations
            show_progress: Print build progress
        """
        self.settings = settings
        self.cache = cache or FrameworkCache(settings.resolved_cache_dir())
        self.show_progress = show_progress
        self.orchestrator = BuildOrchestrator(settings, executor=executor, show_progress=show_progress)

    def _assembler(self, logs_output_dir: Optional[Path]) -> FrameworkAssembler:
        logs_dir = logs_output_dir if logs_output_dir is not None else self.settings.resolved_logs_dir()
        return FrameworkAssembler(
            self.orchestrator,
            output_dir=self.settings.resolved_output_dir(),
            logs_dir=logs_dir,
            show_progress=self.show_progress,
        )

    def build_framework(
        self,
        name: str,
        version: str,
        logs_output_dir: Optional[Path] = None,
        use_cached: bool = False
    ) -> Path:
        """
        Build a fat framework for a given framework name.

        Args:
            name: The name of the framework being built
            version: String representation of the version
            logs_output_dir: Directory to place build logs (default: settings)
            use_cached: Return an already cached framework instead of rebuilding

        Returns:
            Path to the framework in the cache
        """
        mode = self.settings.distribution_mode

        if use_cached and self.cache.is_cached(name, version, mode):
            cached = self.cache.cached_framework_path(name, version, mode)
            if self.show_progress:
                print(f"Using cached {name} {version}: {cached}")
            return cached

        if self.show_progress:
            print(f"Building {name}")

        self.cache.prepare(name, version, mode)

        start_time = time.time()
        xcframework = self._assembler(logs_output_dir).assemble(name, self.settings.architectures)
        cached = self.cache.store(name, version, xcframework, mode)

        logger.info(f"Built {name} {version} in {time.time() - start_time:.2f}s")
        return cached
