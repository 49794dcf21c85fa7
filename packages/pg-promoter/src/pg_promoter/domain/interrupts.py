"""Inbound interrupt flags and wake results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WakeReason(Enum):
    """Reasons a latch wait can end.

    Attributes:
        TIMEOUT: The wait bound elapsed.
        LATCH_SET: Someone (usually a signal handler) set the latch.
        HOST_DEATH: The supervising host process is gone.
    """

    TIMEOUT = "timeout"
    LATCH_SET = "latch_set"
    HOST_DEATH = "host_death"


@dataclass(frozen=True)
class WakeResult:
    """Outcome of a single latch wait.

    More than one reason can be reported at once, e.g. a latch set by a
    SIGTERM that arrived just as the host died.

    Attributes:
        reasons: Reasons that ended the wait.
    """

    reasons: frozenset[WakeReason]

    @classmethod
    def of(cls, *reasons: WakeReason) -> WakeResult:
        return cls(frozenset(reasons))

    @property
    def timed_out(self) -> bool:
        return WakeReason.TIMEOUT in self.reasons

    @property
    def latch_set(self) -> bool:
        return WakeReason.LATCH_SET in self.reasons

    @property
    def host_died(self) -> bool:
        return WakeReason.HOST_DEATH in self.reasons


class InterruptFlags:
    """Flags written by asynchronous signal handlers.

    Handlers only flip these flags and wake the latch; the controller
    reads them at fixed checkpoints in its loop. Shutdown is monotonic:
    once requested it stays requested. A reload request is cleared each
    time it is consumed.
    """

    def __init__(self) -> None:
        self._shutdown_requested = False
        self._reload_requested = False

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    @property
    def reload_requested(self) -> bool:
        return self._reload_requested

    def request_shutdown(self) -> None:
        self._shutdown_requested = True

    def request_reload(self) -> None:
        self._reload_requested = True

    def consume_reload(self) -> bool:
        """Clear the reload flag and return whether it was set."""
        requested = self._reload_requested
        self._reload_requested = False
        return requested
