"""Fake latch for testing the failover loop without sleeping."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable

from pg_promoter.domain.interrupts import WakeReason, WakeResult


class FakeLatch:
    """Fake implementation of LatchPort.

    wait() never blocks. It records the requested timeout, runs any callback
    registered for that wait (to simulate a signal arriving mid-wait), then
    returns the next scripted WakeResult, LATCH_SET if set() was called, or
    TIMEOUT.

    Example:
        >>> latch = FakeLatch()
        >>> latch.during_wait(2, flags.request_shutdown)
    """

    def __init__(self, max_waits: int = 1000) -> None:
        """Initialize the fake.

        Args:
            max_waits: Safety limit; wait() raises RuntimeError beyond it so a
                loop that never terminates fails the test instead of hanging.
        """
        self._wakes: deque[WakeResult] = deque()
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._is_set = False
        self._max_waits = max_waits
        self.timeouts: list[float] = []
        self.set_count = 0
        self.reset_count = 0
        self.closed = False

    @property
    def wait_count(self) -> int:
        return len(self.timeouts)

    @property
    def is_set(self) -> bool:
        return self._is_set

    def queue_wake(self, *reasons: WakeReason) -> None:
        """Script the result of a future wait."""
        self._wakes.append(WakeResult.of(*reasons))

    def during_wait(self, index: int, callback: Callable[[], None]) -> None:
        """Run *callback* while the wait with 0-based *index* is blocked."""
        self._callbacks[index] = callback

    def wait(self, timeout: float) -> WakeResult:
        index = len(self.timeouts)
        if index >= self._max_waits:
            raise RuntimeError(f"FakeLatch.wait() called more than {self._max_waits} times")
        self.timeouts.append(timeout)

        callback = self._callbacks.pop(index, None)
        if callback is not None:
            callback()

        if self._wakes:
            return self._wakes.popleft()
        if self._is_set:
            return WakeResult.of(WakeReason.LATCH_SET)
        return WakeResult.of(WakeReason.TIMEOUT)

    def set(self) -> None:
        self._is_set = True
        self.set_count += 1

    def reset(self) -> None:
        self._is_set = False
        self.reset_count += 1

    def close(self) -> None:
        self.closed = True
