"""Port interface and no-op implementation for metrics collection.

Metrics ports follow fire-and-forget semantics: implementations may
buffer, sample, or drop metrics as needed. No exceptions should propagate.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pg_promoter.domain.heartbeat import PromotionOutcome
from pg_promoter.domain.state import ControllerPhase


@runtime_checkable
class MetricsPort(Protocol):
    """Port interface for metrics collection.

    Implementations handle metrics recording to various backends
    (Prometheus, StatsD, etc.). Abstracts the metrics mechanism from
    the failover loop.

    Contract:
        - All methods are fire-and-forget (no return value, no exceptions)
        - set_* methods update gauges, record_* methods increment counters
        - Implementations may no-op if metrics are disabled
    """

    def set_consecutive_failures(self, count: int) -> None:
        """Set the consecutive heartbeat failures gauge.

        Args:
            count: Current failure tally.
        """
        ...

    def record_heartbeat(self, success: bool) -> None:
        """Count one heartbeat.

        Args:
            success: True if the primary answered.
        """
        ...

    def set_phase(self, phase: ControllerPhase) -> None:
        """Set the controller phase gauge.

        Args:
            phase: Current controller phase.
        """
        ...

    def record_promotion(self, outcome: PromotionOutcome) -> None:
        """Count a promotion attempt by outcome.

        Args:
            outcome: Result of the promotion.
        """
        ...


class NoOpMetricsAdapter:
    """No-operation metrics adapter for when metrics are disabled.

    All methods are no-ops. This allows the controller to unconditionally
    call metrics methods without checking if metrics are enabled.
    """

    def set_consecutive_failures(self, count: int) -> None:
        """No-op."""
        pass

    def record_heartbeat(self, success: bool) -> None:
        """No-op."""
        pass

    def set_phase(self, phase: ControllerPhase) -> None:
        """No-op."""
        pass

    def record_promotion(self, outcome: PromotionOutcome) -> None:
        """No-op."""
        pass
