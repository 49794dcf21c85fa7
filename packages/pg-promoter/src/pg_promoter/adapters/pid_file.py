"""Filesystem adapter for resolving the postmaster process id."""

from __future__ import annotations

import os
from pathlib import Path

from pg_promoter.domain.exceptions import HostPidError


class PostmasterPidFile:
    """Read the host process id from a postmaster.pid style file.

    The first line of the file holds the pid; any further lines (data
    directory, start time, port, ...) are ignored.

    Example:
        >>> PostmasterPidFile(Path("/var/lib/postgresql/data/postmaster.pid")).resolve()
        4242
    """

    def __init__(self, pid_file: Path) -> None:
        """Initialize the resolver.

        Args:
            pid_file: Path to the pid file.
        """
        self._pid_file = Path(pid_file)

    @property
    def pid_file(self) -> Path:
        """Return the path of the pid file."""
        return self._pid_file

    def resolve(self) -> int:
        """Read and parse the pid.

        Returns:
            The host process id (always positive).

        Raises:
            HostPidError: If the file cannot be read, or does not start with
                a positive integer.
        """
        try:
            content = self._pid_file.read_bytes()
        except OSError as e:
            raise HostPidError(
                f"could not open pid file {self._pid_file}: {e}", self._pid_file
            ) from e

        # later lines may hold a data directory path in any encoding
        lines = content.splitlines()
        first_line = lines[0].decode("ascii", errors="replace").strip() if lines else ""
        try:
            pid = int(first_line)
        except ValueError as e:
            raise HostPidError(
                f"could not scan pid from pid file {self._pid_file}: {first_line!r}",
                self._pid_file,
            ) from e

        if pid <= 0:
            raise HostPidError(
                f"pid file {self._pid_file} holds an invalid pid: {pid}",
                self._pid_file,
            )
        return pid


def is_process_alive(pid: int) -> bool:
    """Return True if a process with *pid* exists.

    Uses signal 0, which performs error checking without delivering a
    signal. A permission error still means the process exists.
    """
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True
