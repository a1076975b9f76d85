"""Toolchain Flag Builder.

This module builds the xcodebuild argument lists used by a framework build.

Design:
    - One argument list per architecture group, fully deterministic
    - Catalyst builds target the underlying x86_64 slice with
      SUPPORTS_MACCATALYST enabled
    - OTHER_CFLAGS carries the distribution marker plus the platform's
      extra flags
    - Combine arguments for -create-xcframework
"""

from pathlib import Path
from typing import List, Sequence

from ..config.architectures import Architecture, TargetPlatform, extra_compiler_flags
from ..config.settings import DistributionMode


class FlagBuilder:
    """Builds xcodebuild arguments for a workspace.

    This class handles:
    - Release build arguments for one architecture group
    - Architecture list selection (catalyst vs. regular slices)
    - OTHER_CFLAGS composition
    - xcframework creation arguments
    """

    def __init__(self, workspace_path: Path, distribution_mode: DistributionMode = DistributionMode.ZIP):
        """Initialize flag builder.

        Args:
            workspace_path: Path to the .xcworkspace to build
            distribution_mode: Distribution mode whose marker define is added
        """
        self.workspace_path = workspace_path
        self.distribution_mode = distribution_mode

    @staticmethod
    def arch_list(archs: Sequence[Architecture]) -> str:
        """Get the ARCHS value for a group.

        Catalyst groups build the plain x86_64 slice; everything else builds
        the group's architectures, space separated.
        """
        if archs[0].is_catalyst:
            return Architecture.X86_64.value
        return " ".join(arch.value for arch in archs)

    def other_cflags(self, platform: TargetPlatform) -> str:
        """Get the composite OTHER_CFLAGS setting for a platform.

        Example:
            >>> FlagBuilder(Path("W.xcworkspace")).other_cflags(TargetPlatform.DEVICE)
            'OTHER_CFLAGS=$(value) -DFIREBASE_BUILD_ZIP_FILE -fembed-bitcode'
        """
        parts = ["OTHER_CFLAGS=$(value)", self.distribution_mode.marker_flag]
        parts.extend(extra_compiler_flags(platform))
        return " ".join(parts)

    def build_args(self, scheme: str, archs: Sequence[Architecture], build_dir: Path) -> List[str]:
        """Build the xcodebuild arguments for one architecture group.

        Args:
            scheme: Scheme (target) to build
            archs: Architectures built together in this invocation
            build_dir: BUILD_DIR the products are written under

        Returns:
            Argument list (without the xcodebuild executable)
        """
        if not archs:
            raise ValueError("At least one architecture is required")

        platform = archs[0].platform
        clean_arch = self.arch_list(archs)
        supports_catalyst = "YES" if archs[0].is_catalyst else "NO"

        return [
            "build",
            "-configuration", "release",
            "-workspace", str(self.workspace_path),
            "-scheme", scheme,
            "GCC_GENERATE_DEBUGGING_SYMBOLS=No",
            f"ARCHS={clean_arch}",
            f"VALID_ARCHS={clean_arch}",
            "ONLY_ACTIVE_ARCH=NO",
            "BUILD_LIBRARIES_FOR_DISTRIBUTION=YES",
            f"SUPPORTS_MACCATALYST={supports_catalyst}",
            f"BUILD_DIR={build_dir}",
            "-sdk", platform.sdk,
            self.other_cflags(platform),
        ]

    @staticmethod
    def create_xcframework_args(output_path: Path, frameworks: Sequence[Path]) -> List[str]:
        """Build the arguments that merge thin frameworks into an xcframework.

        Args:
            output_path: Destination .xcframework path
            frameworks: Per-group .framework bundles

        Returns:
            Argument list (without the xcodebuild executable)
        """
        args = ["-create-xcframework", "-output", str(output_path)]
        for framework in frameworks:
            args.extend(["-framework", str(framework)])
        return args
