"""Prometheus metrics adapter for pg-promoter.

Implements MetricsPort using prometheus-client library.
prometheus-client is optional (raises ImportError at init when missing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pg_promoter.domain.heartbeat import PromotionOutcome
from pg_promoter.domain.state import ControllerPhase

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry, Counter, Gauge

_PHASE_VALUES = {
    ControllerPhase.RUNNING: 0,
    ControllerPhase.PROMOTING: 1,
    ControllerPhase.TERMINATED: 2,
}


class PrometheusMetricsAdapter:
    """Prometheus implementation of MetricsPort.

    All metric names use a configurable prefix (default 'pg_promoter').

    This adapter requires prometheus-client to be installed:
        pip install pg-promoter[metrics]

    Example:
        >>> adapter = PrometheusMetricsAdapter(prefix="standby")
        >>> adapter.set_consecutive_failures(2)  # standby_consecutive_failures = 2
        >>> adapter.record_heartbeat(False)

    Raises:
        ImportError: If prometheus-client is not installed.
    """

    def __init__(
        self,
        prefix: str = "pg_promoter",
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize Prometheus collectors.

        Args:
            prefix: Metric name prefix. Defaults to "pg_promoter".
            registry: Registry to register with. Defaults to the global
                     prometheus_client REGISTRY.

        Raises:
            ImportError: If prometheus-client is not installed.
        """
        # Import here to make prometheus-client optional
        from prometheus_client import REGISTRY, Counter, Gauge

        if registry is None:
            registry = REGISTRY

        self._consecutive_failures: Gauge = Gauge(
            f"{prefix}_consecutive_failures",
            "Consecutive failed heartbeats against the primary",
            registry=registry,
        )
        self._heartbeats: Counter = Counter(
            f"{prefix}_heartbeats",
            "Heartbeats against the primary by result",
            ["result"],
            registry=registry,
        )
        self._phase: Gauge = Gauge(
            f"{prefix}_phase",
            "Controller phase: 0=running, 1=promoting, 2=terminated",
            registry=registry,
        )
        self._promotions: Counter = Counter(
            f"{prefix}_promotions",
            "Promotion attempts by outcome",
            ["outcome"],
            registry=registry,
        )

    def set_consecutive_failures(self, count: int) -> None:
        self._consecutive_failures.set(count)

    def record_heartbeat(self, success: bool) -> None:
        self._heartbeats.labels(result="success" if success else "failure").inc()

    def set_phase(self, phase: ControllerPhase) -> None:
        self._phase.set(_PHASE_VALUES[phase])

    def record_promotion(self, outcome: PromotionOutcome) -> None:
        self._promotions.labels(outcome=outcome.value).inc()
