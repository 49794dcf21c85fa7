"""Pytest configuration for core adapter unit tests."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


@pytest.fixture
def child_process() -> Iterator[subprocess.Popen[bytes]]:
    """Start a short-lived child process that stands in for the host.

    The child is killed and reaped on teardown if the test left it running.

    Example:
        def test_host_death(child_process):
            latch = ProcessLatch(child_process.pid)
            child_process.kill()
            child_process.wait()
    """
    proc = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)"])
    try:
        yield proc
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()


@pytest.fixture
def dead_pid(child_process: subprocess.Popen[bytes]) -> int:
    """Return the pid of a child process that has exited and been reaped."""
    child_process.kill()
    child_process.wait()
    return child_process.pid


@pytest.fixture
def write_pid_file(data_dir: Path) -> Callable[[str], Path]:
    """Write postmaster.pid content into the temporary data directory."""

    def _write(content: str) -> Path:
        path = data_dir / "postmaster.pid"
        path.write_text(content)
        return path

    return _write
