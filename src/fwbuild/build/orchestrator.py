"""
Build orchestration for a single framework target.

This module turns a set of requested architectures into xcodebuild
invocations:
- Architectures are grouped so each invocation targets one SDK
- One release build per group, output captured and written to a log
- The path of each group's thin .framework is derived from the known
  xcodebuild products layout
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..config.architectures import Architecture
from ..config.frameworks import FRAMEWORK_EXTENSION, real_framework_name
from ..config.settings import BuildSettings
from .build_utils import write_log
from .flag_builder import FlagBuilder
from .process_executor import ProcessExecutor

logger = logging.getLogger(__name__)

ArchitectureGroup = Tuple[Architecture, ...]

# Legacy 32/64-bit pairs that share an SDK and are built in one pass.
# Order matters: it fixes the order groups are emitted in.
LEGACY_PAIRS: List[ArchitectureGroup] = [
    (Architecture.ARMV7, Architecture.ARM64),
    (Architecture.I386, Architecture.X86_64),
]


@dataclass(frozen=True)
class ThinFramework:
    """A framework built for a single architecture group."""

    path: Path
    archs: ArchitectureGroup


class BuildOrchestratorError(Exception):
    """Exception raised when building an architecture group fails.

    Attributes:
        returncode: Exit status of the toolchain (None if it never ran)
        output: Captured toolchain output
        log_path: Log file holding the captured output, if written
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        output: str = "",
        log_path: Optional[Path] = None
    ):
        super().__init__(message)
        self.returncode = returncode
        self.output = output
        self.log_path = log_path


def group_architectures(requested: Iterable[Architecture]) -> List[ArchitectureGroup]:
    """
    Group architectures into the fewest toolchain invocations.

    A legacy pair is emitted as one group when both of its members are
    requested. Every other architecture becomes a group of its own, in
    Architecture declaration order, so the result only depends on which
    architectures were requested.

    Args:
        requested: Architectures to build (duplicates are ignored)

    Returns:
        Ordered list of architecture groups covering the request exactly once

    Example:
        >>> group_architectures({Architecture.ARMV7, Architecture.ARM64, Architecture.X86_64H})
        [(<Architecture.ARMV7: 'armv7'>, <Architecture.ARM64: 'arm64'>), (<Architecture.X86_64H: 'x86_64h'>,)]
    """
    remaining = set(requested)
    groups: List[ArchitectureGroup] = []

    for pair in LEGACY_PAIRS:
        if all(arch in remaining for arch in pair):
            groups.append(pair)
            remaining.difference_update(pair)

    for arch in Architecture:
        if arch in remaining:
            groups.append((arch,))

    return groups


class BuildOrchestrator:
    """
    Builds thin frameworks for architecture groups.

    Example usage:
        orchestrator = BuildOrchestrator(BuildSettings(project_dir=Path(".")))
        for archs in group_architectures([Architecture.ARM64, Architecture.X86_64]):
            thin = orchestrator.build_group(
                "FirebaseCore", archs,
                build_dir=orchestrator.build_dir_for(archs),
                log_root=Path("/tmp/build_logs"),
            )
            print(thin.path)
    """

    def __init__(
        self,
        settings: BuildSettings,
        executor: Optional[ProcessExecutor] = None,
        show_progress: bool = True
    ):
        """
        Initialize build orchestrator.

        Args:
            settings: Build settings (workspace, toolchain, distribution mode)
            executor: Process executor (defaults to a new ProcessExecutor)
            show_progress: Print build progress
        """
        self.settings = settings
        self.executor = executor or ProcessExecutor(echo_output=settings.verbose)
        self.show_progress = show_progress
        self.flag_builder = FlagBuilder(settings.workspace_path, settings.distribution_mode)

    def build_dir_for(self, archs: ArchitectureGroup) -> Path:
        """Get the BUILD_DIR used for a group: <project>/<first arch>."""
        return self.settings.project_dir / archs[0].value

    @staticmethod
    def log_file_for(framework: str, archs: ArchitectureGroup, log_root: Path) -> Path:
        """Get the log file for a group: <framework>-<arch>-<platform>.txt."""
        arch = archs[0]
        return log_root / f"{framework}-{arch.value}-{arch.platform.value}.txt"

    @staticmethod
    def thin_framework_path(framework: str, archs: ArchitectureGroup, build_dir: Path) -> Path:
        """Get the path xcodebuild writes a group's framework to.

        Layout: <build_dir>/Release-<platform folder>/<framework>/<real name>.framework
        """
        platform_folder = archs[0].platform.output_folder
        real_name = real_framework_name(framework)
        return build_dir / f"Release-{platform_folder}" / framework / f"{real_name}.{FRAMEWORK_EXTENSION}"

    def build_group(
        self,
        framework: str,
        archs: ArchitectureGroup,
        build_dir: Path,
        log_root: Path
    ) -> ThinFramework:
        """
        Build a thin framework for one architecture group.

        The captured toolchain output is always written to the group's log
        file. A failed build aborts with BuildOrchestratorError; failing to
        write the log of a successful build only logs a warning.

        Args:
            framework: Name of the framework (scheme) to build
            archs: Architectures built together in this invocation
            build_dir: Location where the project should be built
            log_root: Directory the build log is written to

        Returns:
            ThinFramework locating the built framework

        Raises:
            BuildOrchestratorError: If the toolchain exits with non-zero status
        """
        if not archs:
            raise BuildOrchestratorError(f"No architectures given for {framework}")

        arch = archs[0]
        args = self.flag_builder.build_args(framework, archs, build_dir)
        command = self.settings.xcodebuild_path
        log_file = self.log_file_for(framework, archs, log_root)

        if self.show_progress:
            print(f"Compiling {framework} for {arch.value} with command:")
            print(f"{command} {' '.join(args)}")

        result = self.executor.run(command, args, capture_output=True)

        if not result.success:
            try:
                write_log(log_file, result.output)
            except OSError as e:
                raise BuildOrchestratorError(
                    f"Error building {framework} for {arch.value}. Code: {result.returncode}. "
                    f"The build log could not be written to {log_file}: {e}",
                    returncode=result.returncode,
                    output=result.output,
                ) from e
            raise BuildOrchestratorError(
                f"Error building {framework} for {arch.value}. Code: {result.returncode}. "
                f"See the build log at {log_file}",
                returncode=result.returncode,
                output=result.output,
                log_path=log_file,
            )

        try:
            write_log(log_file, result.output)
        except OSError as e:
            logger.warning(f"Could not write build log {log_file}: {e}")

        if self.show_progress:
            print(f"Successfully built {framework} for {arch.value}. Build log can be found at {log_file}")

        thin_path = self.thin_framework_path(framework, archs, build_dir)
        logger.debug(f"Thin framework for {framework} ({arch.value}): {thin_path}")
        return ThinFramework(path=thin_path, archs=archs)
