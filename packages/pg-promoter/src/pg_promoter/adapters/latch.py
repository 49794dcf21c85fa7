"""Self-pipe latch: the failover loop's single blocking wait primitive.

A latch wakes the waiter when any of these happen:
- the timeout elapses,
- set() is called (typically from a signal handler),
- the watched host process exits.

set() only writes one byte to a non-blocking pipe, which is safe to do from
a Python signal handler. Host death is detected with a pidfd where the
platform supports it, and by probing the pid with signal 0 otherwise.
"""

from __future__ import annotations

import logging
import os
import selectors
from types import TracebackType

from pg_promoter.adapters.pid_file import is_process_alive
from pg_promoter.domain.interrupts import WakeReason, WakeResult

logger = logging.getLogger(__name__)


class ProcessLatch:
    """LatchPort implementation backed by a self-pipe and a selector.

    Example:
        >>> with ProcessLatch(host_pid=4242) as latch:
        ...     result = latch.wait(5)
        ...     latch.reset()
    """

    def __init__(self, host_pid: int | None = None) -> None:
        """Create the pipe and, if requested, start watching the host.

        Args:
            host_pid: Process id of the host to watch, or None to disable
                host-death detection.
        """
        self._host_pid = host_pid
        self._host_gone = False
        self._pidfd: int | None = None
        self._read_fd, self._write_fd = os.pipe()
        os.set_blocking(self._read_fd, False)
        os.set_blocking(self._write_fd, False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(
            self._read_fd, selectors.EVENT_READ, WakeReason.LATCH_SET
        )
        if host_pid is not None:
            self._watch_host(host_pid)

    @property
    def host_pid(self) -> int | None:
        return self._host_pid

    @property
    def watches_with_pidfd(self) -> bool:
        """True when host death is reported by a pidfd rather than probing."""
        return self._pidfd is not None

    def _watch_host(self, host_pid: int) -> None:
        pidfd_open = getattr(os, "pidfd_open", None)
        if pidfd_open is None:
            logger.debug("pidfd_open not available, probing host pid after each wait")
            return
        try:
            self._pidfd = pidfd_open(host_pid)
        except ProcessLookupError:
            logger.warning(f"Host process {host_pid} is already gone")
            self._host_gone = True
            return
        except OSError as e:
            logger.debug(f"pidfd_open({host_pid}) failed ({e}), probing host pid instead")
            return
        self._selector.register(self._pidfd, selectors.EVENT_READ, WakeReason.HOST_DEATH)

    def set(self) -> None:
        """Wake the waiter. Safe to call from a signal handler."""
        try:
            os.write(self._write_fd, b"\0")
        except BlockingIOError:
            # pipe full: latch is already set
            pass

    def reset(self) -> None:
        """Drain the pipe so the next wait blocks again."""
        while True:
            try:
                data = os.read(self._read_fd, 4096)
            except BlockingIOError:
                return
            if not data:
                return

    def wait(self, timeout: float) -> WakeResult:
        """Block for at most *timeout* seconds.

        Args:
            timeout: Upper bound on the wait, in seconds.

        Returns:
            WakeResult naming every reason the wait ended.
        """
        if self._host_gone:
            return WakeResult.of(WakeReason.HOST_DEATH)

        events = self._selector.select(timeout)
        reasons = {key.data for key, _ in events}
        if not events:
            reasons.add(WakeReason.TIMEOUT)

        if self._pidfd is None and self._host_pid is not None:
            if not is_process_alive(self._host_pid):
                reasons.add(WakeReason.HOST_DEATH)

        if WakeReason.HOST_DEATH in reasons:
            self._host_gone = True
        return WakeResult(frozenset(reasons))

    def close(self) -> None:
        """Release the selector and every file descriptor."""
        self._selector.close()
        for fd in (self._read_fd, self._write_fd, self._pidfd):
            if fd is not None:
                os.close(fd)
        self._pidfd = None

    def __enter__(self) -> ProcessLatch:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
