"""Utilities for handling KeyboardInterrupt while external tools run.

xcodebuild spawns its own compiler processes, so stopping a build on Ctrl-C
means taking down the whole process tree before propagating the interrupt.
"""

import _thread
import logging
import threading

import psutil

logger = logging.getLogger(__name__)


def terminate_process_tree(root_pid: int, timeout: float = 3.0) -> int:
    """Terminate a process and all of its children.

    Children are terminated before their parents. Processes that ignore
    the terminate request within ``timeout`` seconds are killed.

    Args:
        root_pid: PID of the root process
        timeout: Seconds to wait for graceful termination

    Returns:
        Number of processes that were signalled
    """
    try:
        root = psutil.Process(root_pid)
    except psutil.NoSuchProcess:
        return 0

    try:
        children = root.children(recursive=True)
    except psutil.NoSuchProcess:
        children = []

    processes = list(reversed(children)) + [root]
    signalled = 0
    for proc in processes:
        try:
            proc.terminate()
            signalled += 1
        except psutil.NoSuchProcess:
            pass  # Already gone
        except psutil.AccessDenied as e:
            logger.warning(f"Failed to terminate process {proc.pid}: {e}")

    _gone, alive = psutil.wait_procs(processes, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
            logger.warning(f"Force killed stubborn process {proc.pid}")
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied as e:
            logger.warning(f"Failed to force kill process {proc.pid}: {e}")

    return signalled


def handle_keyboard_interrupt_properly(ke: KeyboardInterrupt) -> None:
    """Propagate a KeyboardInterrupt to the main thread and re-raise it.

    When the interrupt is caught on a worker thread the main thread is
    interrupted as well, otherwise it would keep waiting on the worker.

    Usage:
        try:
            run_external_tool()
        except KeyboardInterrupt as ke:
            handle_keyboard_interrupt_properly(ke)

    Raises:
        KeyboardInterrupt: Always re-raises the exception after handling
    """
    if threading.current_thread() is not threading.main_thread():
        _thread.interrupt_main()
    raise ke
