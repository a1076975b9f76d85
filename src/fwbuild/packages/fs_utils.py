"""Filesystem helpers for cache and scratch directories."""

import os
import shutil
import stat
import time
from pathlib import Path
from typing import Any, Callable


def remove_readonly(func: Callable[[str], None], path: str, excinfo: Any) -> None:
    """
    Error handler for shutil.rmtree that clears the read-only bit and retries.

    Build products copied out of Xcode are sometimes read-only.
    """
    os.chmod(path, stat.S_IWRITE)
    func(path)


def safe_rmtree(path: Path, max_retries: int = 3) -> None:
    """
    Remove a file or directory tree if it exists.

    Symlinks are unlinked, never followed.

    Args:
        path: Path to remove
        max_retries: Attempts before giving up on locked files

    Raises:
        OSError: If the path cannot be removed after all retries
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return
    if not path.exists():
        return

    for attempt in range(max_retries):
        try:
            shutil.rmtree(path, onerror=remove_readonly)
            return
        except OSError as e:
            if attempt < max_retries - 1:
                # Files might be temporarily locked
                time.sleep(0.5)
            else:
                raise OSError(
                    f"Failed to remove {path} after {max_retries} attempts: {e}"
                ) from e
