"""Domain events for the failover loop.

Events are immutable value objects representing notable transitions of the
promoter worker. They follow the frozen dataclass pattern used throughout
the domain layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailoverEventType(Enum):
    """Types of failover events that can be emitted.

    Attributes:
        HEARTBEAT_FAILED: A heartbeat against the primary failed.
        HEARTBEAT_RECOVERED: A heartbeat succeeded after one or more failures.
        CONFIG_RELOADED: Reloadable settings were re-read.
        PROMOTION_STARTED: Failure threshold reached, promotion begins.
        PROMOTED: Trigger file written and host signalled.
        PROMOTION_FAILED: Promotion could not be completed.
        SHUTDOWN: Loop exited on a shutdown request.
        HOST_DIED: Loop exited because the host process is gone.
    """

    HEARTBEAT_FAILED = "heartbeat_failed"
    HEARTBEAT_RECOVERED = "heartbeat_recovered"
    CONFIG_RELOADED = "config_reloaded"
    PROMOTION_STARTED = "promotion_started"
    PROMOTED = "promoted"
    PROMOTION_FAILED = "promotion_failed"
    SHUTDOWN = "shutdown"
    HOST_DIED = "host_died"


@dataclass(frozen=True)
class FailoverEvent:
    """Immutable event emitted by FailoverController.

    Attributes:
        event_type: The type of event that occurred.
        reason: Optional human-readable reason for the event.
    """

    event_type: FailoverEventType
    reason: str | None = None
