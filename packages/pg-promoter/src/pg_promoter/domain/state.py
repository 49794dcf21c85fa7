"""Failover loop state and process exit status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ControllerPhase(Enum):
    """Phases of the failover controller.

    Attributes:
        RUNNING: Waiting and checking the primary.
        PROMOTING: Failure threshold reached, promotion in progress.
        TERMINATED: Loop has exited (shutdown, host death or after promotion).
    """

    RUNNING = "running"
    PROMOTING = "promoting"
    TERMINATED = "terminated"


class ExitStatus(IntEnum):
    """Process exit status of the worker."""

    SUCCESS = 0
    FAILURE = 1


@dataclass
class FailoverState:
    """Mutable state of the failover loop.

    Owned by FailoverController and mutated only from its loop, so no
    locking is needed.

    Attributes:
        consecutive_failures: Back-to-back failed heartbeats. Never negative.
        phase: Current controller phase.
        promotion_attempted: Set once when the promoter is invoked.
        exit_status: Set when the phase becomes TERMINATED.
    """

    consecutive_failures: int = 0
    phase: ControllerPhase = ControllerPhase.RUNNING
    promotion_attempted: bool = False
    exit_status: ExitStatus | None = None

    def record_failure(self) -> int:
        """Count one failed heartbeat and return the new tally."""
        self.consecutive_failures += 1
        return self.consecutive_failures

    def record_success(self) -> None:
        """Reset the tally after a successful heartbeat."""
        self.consecutive_failures = 0

    def terminate(self, status: ExitStatus) -> None:
        """Move to TERMINATED with the given exit status."""
        self.phase = ControllerPhase.TERMINATED
        self.exit_status = status

    @property
    def is_running(self) -> bool:
        return self.phase is ControllerPhase.RUNNING
