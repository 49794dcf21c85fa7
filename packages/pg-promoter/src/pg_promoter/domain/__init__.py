"""Domain layer: Entities with zero external dependencies."""

from pg_promoter.domain.settings import PromoterSettings
from pg_promoter.domain.exceptions import (
    PromoterError,
    PromoterConfigError,
    PrimaryUnavailableError,
    PrimaryConnectionError,
    PrimaryQueryError,
    StartupCheckError,
    HostPidError,
    PromotionError,
    TriggerFileError,
    PromotionSignalError,
    PromotionAlreadyAttemptedError,
)
from pg_promoter.domain.events import FailoverEvent, FailoverEventType
from pg_promoter.domain.heartbeat import (
    HeartbeatFailure,
    HeartbeatResult,
    PromotionOutcome,
    PromotionResult,
)
from pg_promoter.domain.interrupts import InterruptFlags, WakeReason, WakeResult
from pg_promoter.domain.state import ControllerPhase, ExitStatus, FailoverState

__all__ = [
    "PromoterSettings",
    "PromoterError",
    "PromoterConfigError",
    "PrimaryUnavailableError",
    "PrimaryConnectionError",
    "PrimaryQueryError",
    "StartupCheckError",
    "HostPidError",
    "PromotionError",
    "TriggerFileError",
    "PromotionSignalError",
    "PromotionAlreadyAttemptedError",
    "FailoverEvent",
    "FailoverEventType",
    "HeartbeatFailure",
    "HeartbeatResult",
    "PromotionOutcome",
    "PromotionResult",
    "InterruptFlags",
    "WakeReason",
    "WakeResult",
    "ControllerPhase",
    "ExitStatus",
    "FailoverState",
]
