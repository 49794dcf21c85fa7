"""Heartbeat and promotion result value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class HeartbeatFailure(Enum):
    """Why a heartbeat failed.

    Attributes:
        CONNECT: Could not establish a connection to the primary.
        RESULT: Connected, but the liveness query did not return exactly one row.
    """

    CONNECT = "connect"
    RESULT = "result"


@dataclass(frozen=True)
class HeartbeatResult:
    """Result of one heartbeat against the primary.

    Attributes:
        is_alive: True if the primary answered the liveness query.
        failure: Kind of failure, or None when alive.
        error: Optional error message describing the failure.
    """

    is_alive: bool
    failure: HeartbeatFailure | None = None
    error: str | None = None

    @classmethod
    def alive(cls) -> HeartbeatResult:
        return cls(is_alive=True)

    @classmethod
    def failed(cls, failure: HeartbeatFailure, error: str) -> HeartbeatResult:
        return cls(is_alive=False, failure=failure, error=error)


class PromotionOutcome(Enum):
    """Outcome of the two-phase promotion.

    Attributes:
        PROMOTED: Trigger file written and host signalled.
        ARTIFACT_FAILED: Trigger file could not be written; nothing was signalled.
        SIGNAL_FAILED: Trigger file written, but the host could not be signalled.
    """

    PROMOTED = "promoted"
    ARTIFACT_FAILED = "artifact_failed"
    SIGNAL_FAILED = "signal_failed"


@dataclass(frozen=True)
class PromotionResult:
    """Result of a promotion attempt.

    Attributes:
        outcome: Which phase completed or failed.
        trigger_path: Full path of the trigger file.
        host_pid: Process id that was (or should have been) signalled.
        error: Optional error message when the promotion failed.
    """

    outcome: PromotionOutcome
    trigger_path: Path
    host_pid: int
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is PromotionOutcome.PROMOTED

    @property
    def artifact_written(self) -> bool:
        """True when the trigger file exists as a result of this attempt."""
        return self.outcome is not PromotionOutcome.ARTIFACT_FAILED
