"""Process Executor.

This module runs external tools (xcodebuild) and reports their outcome.

Design:
    - One external process per call, blocking until it exits
    - Combined stdout/stderr captured incrementally by a reader thread that
      pushes lines onto a queue, so large outputs never stall the pipe
    - The reader is joined after the process exits, draining everything
      still buffered in the pipe before the result is assembled. The join is
      bounded so a descendant holding the pipe open cannot block the caller
    - Exit status is the only success criterion; output is never inspected
"""

import logging
import queue
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Union

from ..interrupt_utils import handle_keyboard_interrupt_properly, terminate_process_tree

logger = logging.getLogger(__name__)

# Output reported when the caller did not ask for capture
COMPLETED_MARKER = "The task completed"

# Seconds to wait for the output pipe to reach EOF after the process exits
DRAIN_TIMEOUT = 5.0


@dataclass
class ProcessResult:
    """Result of running an external process."""

    success: bool
    returncode: int
    output: str


class ProcessExecutorError(Exception):
    """Raised when an external process cannot be started."""
    pass


class ProcessExecutor:
    """Runs external commands and collects their output.

    Example usage:
        executor = ProcessExecutor()
        result = executor.run("/usr/bin/xcodebuild", ["-version"], capture_output=True)
        if not result.success:
            print(f"Exited with {result.returncode}:\\n{result.output}")
    """

    def __init__(self, echo_output: bool = False, drain_timeout: float = DRAIN_TIMEOUT):
        """Initialize process executor.

        Args:
            echo_output: Print captured lines to the console as they arrive
            drain_timeout: Seconds to keep reading output after the process exits
        """
        self.echo_output = echo_output
        self.drain_timeout = drain_timeout

    def run(
        self,
        command: Union[str, Path],
        args: Optional[List[str]] = None,
        capture_output: bool = False
    ) -> ProcessResult:
        """Run a command and wait for it to exit.

        Args:
            command: Path to the executable
            args: Arguments passed to the executable
            capture_output: Capture combined stdout/stderr. When False the
                process writes straight to the console and the result output
                is COMPLETED_MARKER.

        Returns:
            ProcessResult with success flag, exit status and output

        Raises:
            ProcessExecutorError: If the process could not be launched
        """
        cmd = [str(command)] + list(args or [])
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE if capture_output else None,
                stderr=subprocess.STDOUT if capture_output else None,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ProcessExecutorError(f"Failed to launch {command}: {e}") from e

        lines: "queue.Queue[str]" = queue.Queue()
        reader: Optional[threading.Thread] = None
        if capture_output and process.stdout is not None:
            reader = threading.Thread(
                target=self._read_stream,
                args=(process.stdout, lines),
                name=f"output-reader-{process.pid}",
                daemon=True,
            )
            reader.start()

        try:
            returncode = process.wait()
            self._join_reader(reader, process.pid)
        except KeyboardInterrupt as ke:
            terminate_process_tree(process.pid)
            self._join_reader(reader, process.pid)
            handle_keyboard_interrupt_properly(ke)
            raise  # Never reached, but satisfies type checker
        finally:
            # A reader still blocked on the pipe owns the stream
            if process.stdout is not None and (reader is None or not reader.is_alive()):
                process.stdout.close()

        if capture_output:
            output = "\n".join(self._drain(lines))
        else:
            output = COMPLETED_MARKER

        logger.debug(f"{Path(str(command)).name} exited with {returncode}")
        return ProcessResult(success=returncode == 0, returncode=returncode, output=output)

    def _join_reader(self, reader: Optional[threading.Thread], pid: int) -> None:
        """Wait for the reader to hit EOF, at most drain_timeout seconds.

        Descendants that inherited the pipe keep it open after the process
        itself has exited; their output is abandoned.
        """
        if reader is None:
            return
        reader.join(timeout=self.drain_timeout)
        if reader.is_alive():
            logger.warning(
                f"Output pipe of process {pid} is still held open by another process "
                f"after {self.drain_timeout:.1f}s; captured output may be truncated"
            )

    def _read_stream(self, stream: IO[str], lines: "queue.Queue[str]") -> None:
        """Push every line of the stream onto the queue until EOF."""
        for line in stream:
            lines.put(line.rstrip("\n"))
            if self.echo_output:
                print(line, end="")

    @staticmethod
    def _drain(lines: "queue.Queue[str]") -> List[str]:
        collected = []
        while True:
            try:
                collected.append(lines.get_nowait())
            except queue.Empty:
                return collected
