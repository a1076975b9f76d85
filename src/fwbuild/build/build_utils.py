"""Build utilities for fwbuild.

This module provides helpers for persisting build output.
"""

from pathlib import Path


def write_log(log_file: Path, output: str) -> Path:
    """
    Write build output to a log file atomically.

    The output is written next to the log file first and then moved into
    place, so a reader never sees a partially written log. An existing log
    is overwritten.

    Args:
        log_file: Destination log file
        output: Text to write

    Returns:
        Path to the written log file

    Raises:
        OSError: If the log cannot be written
    """
    temp_file = log_file.with_suffix(log_file.suffix + ".tmp")
    with open(temp_file, "w", encoding="utf-8") as f:
        f.write(output)
    temp_file.replace(log_file)
    return log_file
