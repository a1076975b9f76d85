"""
Architecture specifications for framework builds.

This module centralizes the static mapping from CPU architectures to the
SDK they are compiled against and the extra compiler flags each SDK needs.
"""

from enum import Enum
from typing import Iterable, List


class ArchitectureError(Exception):
    """Raised when an architecture name is not recognized."""
    pass


class TargetPlatform(Enum):
    """The platform (SDK) a framework slice is built for."""

    DEVICE = "iphoneos"
    SIMULATOR = "iphonesimulator"
    CATALYST = "macosx"

    @property
    def sdk(self) -> str:
        """SDK identifier passed to the toolchain."""
        return self.value

    @property
    def output_folder(self) -> str:
        """Suffix of the Release-<folder> directory the toolchain writes to."""
        return _OUTPUT_FOLDERS[self]


class Architecture(Enum):
    """Architectures to build frameworks for."""

    ARM64 = "arm64"
    ARMV7 = "armv7"
    I386 = "i386"
    X86_64 = "x86_64"
    X86_64H = "x86_64h"  # Haswell, used for Mac Catalyst

    @property
    def platform(self) -> TargetPlatform:
        """The platform associated with the architecture."""
        return _PLATFORMS[self]

    @property
    def is_catalyst(self) -> bool:
        return self is Architecture.X86_64H


_PLATFORMS = {
    Architecture.ARM64: TargetPlatform.DEVICE,
    Architecture.ARMV7: TargetPlatform.DEVICE,
    Architecture.I386: TargetPlatform.SIMULATOR,
    Architecture.X86_64: TargetPlatform.SIMULATOR,
    Architecture.X86_64H: TargetPlatform.CATALYST,
}

# xcodebuild names the catalyst products folder differently from its SDK
_OUTPUT_FOLDERS = {
    TargetPlatform.DEVICE: "iphoneos",
    TargetPlatform.SIMULATOR: "iphonesimulator",
    TargetPlatform.CATALYST: "maccatalyst",
}

_EXTRA_FLAGS = {
    # Device builds embed bitcode
    TargetPlatform.DEVICE: ["-fembed-bitcode"],
    TargetPlatform.SIMULATOR: [],
    TargetPlatform.CATALYST: [],
}

ALL_ARCHITECTURES = list(Architecture)


def platform_for(architecture: Architecture) -> TargetPlatform:
    """
    Get the target platform for an architecture.

    Args:
        architecture: Architecture to look up

    Returns:
        The TargetPlatform the architecture is compiled against
    """
    return architecture.platform


def extra_compiler_flags(platform: TargetPlatform) -> List[str]:
    """
    Get the extra C flags a platform requires.

    Args:
        platform: Target platform

    Returns:
        New list of flags (callers may mutate it)
    """
    return list(_EXTRA_FLAGS[platform])


def parse_architectures(names: Iterable[str]) -> List[Architecture]:
    """
    Parse architecture names into Architecture values.

    Names are matched case-insensitively; duplicates are dropped while
    keeping the first occurrence.

    Args:
        names: Architecture identifiers (e.g., ['arm64', 'x86_64'])

    Returns:
        List of architectures in the order given

    Raises:
        ArchitectureError: If a name is not a known architecture
    """
    known = {arch.value: arch for arch in Architecture}
    result: List[Architecture] = []
    for name in names:
        key = name.strip().lower()
        if not key:
            continue
        if key not in known:
            raise ArchitectureError(
                f"Unknown architecture '{name}'. "
                f"Valid architectures: {', '.join(known)}"
            )
        if known[key] not in result:
            result.append(known[key])
    return result
