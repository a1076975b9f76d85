"""
Command-line interface for fwbuild.

This module provides the `fwbuild` CLI tool for building multi-architecture
frameworks and flattening CocoaPods header trees.
"""

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fwbuild import __version__
from fwbuild.build import (
    BuildOrchestratorError,
    FrameworkAssemblyError,
    FrameworkBuilder,
    ProcessExecutorError,
)
from fwbuild.cli_utils import ArchitectureParser, ErrorFormatter, PathValidator, setup_logging
from fwbuild.config import Architecture, ArchitectureError, BuildSettings, DistributionMode
from fwbuild.packages import CacheError, HeaderResolutionError, HeaderResolver


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    name: str
    version: str
    project_dir: Path
    archs: List[Architecture]
    carthage: bool = False
    logs_dir: Optional[Path] = None
    use_cache: bool = False
    verbose: bool = False


@dataclass
class HeadersArgs:
    """Arguments for the headers command."""

    source: Path
    destination: Path
    verbose: bool = False


def build_command(args: BuildArgs) -> None:
    """Build a framework and store it in the cache.

    Examples:
        fwbuild build FirebaseCore 6.15.0                 # All architectures
        fwbuild build FirebaseCore 6.15.0 ~/FrameworkMaker
        fwbuild build FirebaseCore 6.15.0 -a arm64,x86_64
        fwbuild build FirebaseCore 6.15.0 --carthage      # Carthage distribution
    """
    print(f"fwbuild Framework Builder v{__version__}")
    print()

    settings = BuildSettings(
        project_dir=args.project_dir,
        architectures=args.archs,
        distribution_mode=DistributionMode.CARTHAGE if args.carthage else DistributionMode.ZIP,
        logs_dir=args.logs_dir,
        verbose=args.verbose,
    )
    setup_logging(settings.resolved_logs_dir(), verbose=args.verbose)

    if args.verbose:
        print(f"Project: {settings.project_dir}")
        print(f"Architectures: {', '.join(arch.value for arch in settings.architectures)}")
        print(f"Logs: {settings.resolved_logs_dir()}")
        print()

    try:
        start_time = time.time()
        builder = FrameworkBuilder(settings)
        framework_path = builder.build_framework(args.name, args.version, use_cached=args.use_cache)
        build_time = time.time() - start_time

        ErrorFormatter.print_success("Build successful!")
        print()
        print(f"Framework: {framework_path}")
        print(f"Build time: {build_time:.2f}s")
        sys.exit(0)

    except BuildOrchestratorError as e:
        ErrorFormatter.handle_build_error("Build failed!", e)
    except FrameworkAssemblyError as e:
        ErrorFormatter.handle_build_error("Framework assembly failed!", e)
    except CacheError as e:
        ErrorFormatter.handle_build_error("Caching failed!", e)
    except ProcessExecutorError as e:
        ErrorFormatter.handle_build_error("Toolchain not available", e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def headers_command(args: HeadersArgs) -> None:
    """Copy an aliased header tree into a directory of real files.

    Examples:
        fwbuild headers Pods/Headers/Public/FirebaseCore out/Headers
    """
    setup_logging(verbose=args.verbose)
    try:
        copied = HeaderResolver().flatten_headers(args.source, args.destination)
        ErrorFormatter.print_success(f"Copied {len(copied)} headers to {args.destination}")
        sys.exit(0)
    except HeaderResolutionError as e:
        ErrorFormatter.handle_build_error("Copying headers failed!", e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="fwbuild",
        description="Build multi-architecture frameworks with xcodebuild",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"fwbuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build a framework and cache the result",
    )
    build_parser.add_argument("name", help="Framework (scheme) name to build")
    build_parser.add_argument("version", help="Framework version used as the cache key")
    build_parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Directory containing the Xcode workspace (default: current directory)",
    )
    build_parser.add_argument(
        "-a",
        "--archs",
        default=None,
        help="Comma-separated architectures (default: all)",
    )
    build_parser.add_argument(
        "--carthage",
        action="store_true",
        help="Build for Carthage distribution",
    )
    build_parser.add_argument(
        "--logs-dir",
        type=Path,
        default=None,
        help="Directory for build logs (default: temporary directory)",
    )
    build_parser.add_argument(
        "--use-cache",
        action="store_true",
        help="Reuse a cached framework instead of rebuilding",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Headers command
    headers_parser = subparsers.add_parser(
        "headers",
        help="Copy a CocoaPods header tree, resolving symlinks",
    )
    headers_parser.add_argument("source", type=Path, help="Aliased headers directory (inside Pods/Headers/)")
    headers_parser.add_argument("destination", type=Path, help="Destination Headers directory")
    headers_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    parsed = parser.parse_args(argv)
    if not parsed.command:
        parser.print_help()
        sys.exit(0)
    return parsed


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the fwbuild command."""
    parsed_args = parse_args(argv)

    if parsed_args.command == "build":
        PathValidator.validate_project_dir(parsed_args.project_dir)
        try:
            archs = ArchitectureParser.parse(parsed_args.archs)
        except ArchitectureError as e:
            ErrorFormatter.print_error("Invalid architectures", str(e))
            sys.exit(2)

        build_args = BuildArgs(
            name=parsed_args.name,
            version=parsed_args.version,
            project_dir=parsed_args.project_dir,
            archs=archs,
            carthage=parsed_args.carthage,
            logs_dir=parsed_args.logs_dir,
            use_cache=parsed_args.use_cache,
            verbose=parsed_args.verbose,
        )
        build_command(build_args)
    elif parsed_args.command == "headers":
        PathValidator.validate_project_dir(parsed_args.source)
        headers_command(HeadersArgs(
            source=parsed_args.source,
            destination=parsed_args.destination,
            verbose=parsed_args.verbose,
        ))


if __name__ == "__main__":
    main()
