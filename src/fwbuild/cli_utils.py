"""CLI utility functions for fwbuild.

This module provides common utilities used across CLI commands including:
- Architecture list parsing
- Logging setup
- Error handling and formatting
- Path validation
"""

import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from fwbuild.config.architectures import ALL_ARCHITECTURES, Architecture, parse_architectures

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "fwbuild.log"

# Handlers installed by the last setup_logging call
_installed_handlers: List[logging.Handler] = []


class ArchitectureParser:
    """Parses architecture lists from command-line strings."""

    @staticmethod
    def parse(archs_string: Optional[str]) -> List[Architecture]:
        """Parse a comma- or space-separated architecture list.

        Args:
            archs_string: e.g. "arm64,x86_64" (None or empty = all architectures)

        Returns:
            Requested architectures

        Raises:
            ArchitectureError: If an architecture name is unknown
        """
        if not archs_string:
            return list(ALL_ARCHITECTURES)
        names = archs_string.replace(",", " ").split()
        return parse_architectures(names)


def setup_logging(logs_dir: Optional[Path] = None, verbose: bool = False) -> None:
    """Setup logging for a CLI run.

    Warnings (or everything at verbose level) go to stderr; when a logs
    directory is given, INFO and above also go to a rotating fwbuild.log.
    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in _installed_handlers:
        logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(logs_dir / LOG_FILE_NAME),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=3,
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Build failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)

    @staticmethod
    def print_success(message: str) -> None:
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_build_error(title: str, error: Exception) -> None:
        """Report a fatal build error and exit with status 1."""
        ErrorFormatter.print_error(title, str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Build interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        ErrorFormatter.print_error("Unexpected error", f"{type(error).__name__}: {error}")
        if verbose:
            print("Traceback:")
            print(traceback.format_exc())
        sys.exit(1)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_project_dir(project_dir: Path) -> None:
        """Validate that a directory exists.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not project_dir.exists():
            print(f"{ErrorFormatter.RED}✗ Error: Path does not exist: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)
        if not project_dir.is_dir():
            print(f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)
