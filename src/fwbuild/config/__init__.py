"""Configuration modules for fwbuild."""

from .architectures import (
    ALL_ARCHITECTURES,
    Architecture,
    ArchitectureError,
    TargetPlatform,
    extra_compiler_flags,
    parse_architectures,
    platform_for,
)
from .frameworks import REAL_FRAMEWORK_NAMES, real_framework_name
from .settings import BuildSettings, DistributionMode

__all__ = [
    "ALL_ARCHITECTURES",
    "Architecture",
    "ArchitectureError",
    "TargetPlatform",
    "extra_compiler_flags",
    "parse_architectures",
    "platform_for",
    "REAL_FRAMEWORK_NAMES",
    "real_framework_name",
    "BuildSettings",
    "DistributionMode",
]
