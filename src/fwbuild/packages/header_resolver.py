"""Header Resolver.

CocoaPods exposes public headers through a tree of symlinks under
Pods/Headers/. A framework needs real files laid out the same way, so this
module resolves every aliased header and copies it into a flat, canonical
Headers directory, keeping each header's path relative to the tree so nested
imports keep working.

Design:
    Source:  <project>/Pods/Headers/Public/FirebaseCore/FIRApp.h  -> symlink
             <project>/Pods/Headers/Public/FirebaseCore/Private/FIRLogger.h
    Copied:  <dest>/FIRApp.h
             <dest>/Private/FIRLogger.h

Relative paths are computed from the part of each path after the
"Pods/Headers/" anchor, so differently prefixed spellings of the same
location (e.g., /var vs. /private/var on macOS) still line up.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List, Sequence

logger = logging.getLogger(__name__)

DEFAULT_ANCHOR = "Pods/Headers/"
HEADER_EXTENSIONS = (".h",)


class HeaderResolutionError(Exception):
    """Raised when headers cannot be mapped or copied."""
    pass


@dataclass(frozen=True)
class HeaderMapping:
    """Where a header goes and where its real contents live."""

    relative_path: str
    resolved_location: Path


class HeaderResolver:
    """Resolves aliased header trees into canonical copies.

    This class handles:
    - Discovering headers through symlinked files and directories
    - Computing each header's path relative to the headers directory
    - Copying resolved headers into a destination directory
    """

    def __init__(self, anchor: str = DEFAULT_ANCHOR, extensions: Sequence[str] = HEADER_EXTENSIONS):
        """Initialize header resolver.

        Args:
            anchor: Path fragment every header path must contain
            extensions: File suffixes treated as headers
        """
        self.anchor = anchor if anchor.endswith("/") else anchor + "/"
        self.extensions = tuple(extensions)

    @staticmethod
    def _standardize(path: Path) -> str:
        """Absolute, normalized, forward-slash path without resolving symlinks."""
        return Path(os.path.abspath(path)).as_posix()

    def strip_anchor(self, path: Path, is_dir: bool = False) -> str:
        """Remove everything up to and including the anchor from a path.

        Args:
            path: Header file or headers directory
            is_dir: Treat path as a directory (so the anchor may end it)

        Returns:
            The remainder of the path after the anchor

        Raises:
            HeaderResolutionError: If the path does not contain the anchor
        """
        full_path = self._standardize(path)
        if is_dir and not full_path.endswith("/"):
            full_path += "/"

        index = full_path.find(self.anchor)
        if index < 0:
            raise HeaderResolutionError(
                f"Could not copy headers for framework: full path does not contain "
                f"`{self.anchor.rstrip('/')}`: {full_path}"
            )
        return full_path[index + len(self.anchor):]

    def find_headers(self, headers_dir: Path) -> List[Path]:
        """Recursively find header files, following symlinked directories.

        Returned paths keep their aliased spelling (symlinks unresolved) and
        are sorted for a deterministic copy order.
        """
        headers: List[Path] = []
        # Real paths of each pending directory's ancestors
        ancestors: Dict[str, FrozenSet[str]] = {}

        for dirpath, dirnames, filenames in os.walk(str(headers_dir), followlinks=True):
            real_dir = os.path.realpath(dirpath)
            chain = ancestors.pop(dirpath, frozenset())
            if real_dir in chain:
                # Symlink cycle back to an ancestor
                dirnames[:] = []
                continue
            chain = chain | {real_dir}
            for dirname in dirnames:
                ancestors[os.path.join(dirpath, dirname)] = chain

            for filename in filenames:
                if filename.endswith(self.extensions):
                    headers.append(Path(dirpath) / filename)

        return sorted(headers)

    def map_headers(self, headers_dir: Path) -> List[HeaderMapping]:
        """Map every header under headers_dir to its relative path and real location.

        Raises:
            HeaderResolutionError: If a path lacks the anchor or a header lies
                outside headers_dir
        """
        trimmed_dir = self.strip_anchor(headers_dir, is_dir=True)
        mappings: List[HeaderMapping] = []

        for header in self.find_headers(headers_dir):
            trimmed_header = self.strip_anchor(header)
            if not trimmed_header.startswith(trimmed_dir):
                raise HeaderResolutionError(
                    f"Header {header} is not located under {headers_dir}"
                )
            relative_path = trimmed_header[len(trimmed_dir):].lstrip("/")
            resolved_location = Path(os.path.realpath(header))
            mappings.append(HeaderMapping(relative_path, resolved_location))

        return mappings

    def flatten_headers(self, headers_dir: Path, destination_dir: Path) -> List[Path]:
        """Copy resolved headers into destination_dir, preserving relative paths.

        Args:
            headers_dir: Aliased headers directory (inside Pods/Headers/)
            destination_dir: Directory receiving real header files

        Returns:
            Paths of the copied headers

        Raises:
            HeaderResolutionError: If mapping or copying fails
        """
        mappings = self.map_headers(headers_dir)
        copied: List[Path] = []

        try:
            destination_dir.mkdir(parents=True, exist_ok=True)
            for mapping in mappings:
                final_path = destination_dir / mapping.relative_path
                final_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(mapping.resolved_location, final_path)
                copied.append(final_path)
        except OSError as e:
            raise HeaderResolutionError(
                f"Failed to copy headers from {headers_dir} to {destination_dir}: {e}"
            ) from e

        logger.debug(f"Copied {len(copied)} headers from {headers_dir} to {destination_dir}")
        return copied
