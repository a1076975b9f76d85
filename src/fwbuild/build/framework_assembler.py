"""Framework Assembler.

This module builds every architecture group of a framework and merges the
resulting thin frameworks into one xcframework.

Design:
    - Fresh scratch output directory per assembly run
    - Groups are built sequentially, in group_architectures() order
    - xcodebuild -create-xcframework merges the thin frameworks
    - Any failure aborts the run; no partial xcframework is returned

Note:
    -create-xcframework does not merge legacy architectures (armv7, i386)
    with their 64-bit counterparts built separately; it reports two
    equivalent library definitions. Such requests are not rejected up front,
    they fail here with the toolchain's own error.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from ..config.architectures import Architecture
from ..config.frameworks import XCFRAMEWORK_EXTENSION
from ..packages.fs_utils import safe_rmtree
from .orchestrator import BuildOrchestrator, ThinFramework, group_architectures

logger = logging.getLogger(__name__)


class FrameworkAssemblyError(Exception):
    """Raised when preparing or merging a framework fails.

    Attributes:
        returncode: Exit status of the combine command (None if it never ran)
        output: Captured combine command output
    """

    def __init__(self, message: str, returncode: Optional[int] = None, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class FrameworkAssembler:
    """Assembles a multi-architecture xcframework.

    This class handles:
    - Preparing the scratch output and logs directories
    - Building one thin framework per architecture group
    - Merging thin frameworks with -create-xcframework
    """

    def __init__(
        self,
        orchestrator: BuildOrchestrator,
        output_dir: Path,
        logs_dir: Path,
        show_progress: bool = True
    ):
        """Initialize framework assembler.

        Args:
            orchestrator: Orchestrator used to build each group
            output_dir: Scratch directory (wiped at the start of every run)
            logs_dir: Directory for per-group build logs
            show_progress: Whether to show assembly progress
        """
        self.orchestrator = orchestrator
        self.output_dir = output_dir
        self.logs_dir = logs_dir
        self.show_progress = show_progress

    def prepare_directories(self, framework: str) -> None:
        """Create an empty output directory and make sure the logs directory exists.

        Raises:
            FrameworkAssemblyError: If either directory cannot be prepared
        """
        try:
            # The scratch directory is not the cache; stale contents are discarded
            safe_rmtree(self.output_dir)
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FrameworkAssemblyError(
                f"Failure creating temporary directory while building {framework}: {e}"
            ) from e

    def xcframework_path(self, framework: str) -> Path:
        return self.output_dir / f"{framework}.{XCFRAMEWORK_EXTENSION}"

    def build_thin_frameworks(self, framework: str, archs: Iterable[Architecture]) -> List[ThinFramework]:
        """Build one thin framework per architecture group.

        Raises:
            BuildOrchestratorError: If any group fails to build
        """
        groups = group_architectures(archs)
        if not groups:
            raise FrameworkAssemblyError(f"No architectures requested for {framework}")

        thin_frameworks: List[ThinFramework] = []
        for group in tqdm(groups, desc=f"Building {framework}", unit="group", disable=not self.show_progress):
            thin = self.orchestrator.build_group(
                framework,
                group,
                build_dir=self.orchestrator.build_dir_for(group),
                log_root=self.logs_dir,
            )
            thin_frameworks.append(thin)
        return thin_frameworks

    def assemble(self, framework: str, archs: Iterable[Architecture]) -> Path:
        """Compile a framework for all architectures and merge the slices.

        Args:
            framework: Name of the framework to build
            archs: Requested architectures

        Returns:
            Path to the merged .xcframework inside the output directory

        Raises:
            FrameworkAssemblyError: If directory setup or merging fails
            BuildOrchestratorError: If any architecture group fails to build
        """
        self.prepare_directories(framework)
        thin_frameworks = self.build_thin_frameworks(framework, archs)

        xcframework = self.xcframework_path(framework)
        args = self.orchestrator.flag_builder.create_xcframework_args(
            xcframework, [thin.path for thin in thin_frameworks]
        )

        if self.show_progress:
            print(f"About to create xcframework for {xcframework} with {args[3:]}")

        result = self.orchestrator.executor.run(
            self.orchestrator.settings.xcodebuild_path, args, capture_output=True
        )
        if not result.success:
            raise FrameworkAssemblyError(
                f"xcodebuild -create-xcframework command exited with {result.returncode} "
                f"when trying to build {framework}. Output:\n{result.output}",
                returncode=result.returncode,
                output=result.output,
            )

        if self.show_progress:
            print(f"xcodebuild -create-xcframework command for {framework} succeeded.")
        logger.info(f"Assembled {xcframework} from {len(thin_frameworks)} thin frameworks")
        return xcframework
