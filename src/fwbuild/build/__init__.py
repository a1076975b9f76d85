"""
Build system components for fwbuild.

This module provides the build system implementation including:
- External process execution with output capture
- xcodebuild argument construction
- Per-architecture-group builds
- xcframework assembly and caching
"""

from .flag_builder import FlagBuilder
from .framework_assembler import FrameworkAssembler, FrameworkAssemblyError
from .framework_builder import FrameworkBuilder
from .orchestrator import (
    LEGACY_PAIRS,
    ArchitectureGroup,
    BuildOrchestrator,
    BuildOrchestratorError,
    ThinFramework,
    group_architectures,
)
from .process_executor import COMPLETED_MARKER, ProcessExecutor, ProcessExecutorError, ProcessResult

__all__ = [
    "FlagBuilder",
    "FrameworkAssembler",
    "FrameworkAssemblyError",
    "FrameworkBuilder",
    "LEGACY_PAIRS",
    "ArchitectureGroup",
    "BuildOrchestrator",
    "BuildOrchestratorError",
    "ThinFramework",
    "group_architectures",
    "COMPLETED_MARKER",
    "ProcessExecutor",
    "ProcessExecutorError",
    "ProcessResult",
]
