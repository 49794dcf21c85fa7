"""Fake metrics adapter for testing.

Provides a test double for MetricsPort that records all metric updates
for assertion in tests.
"""

from __future__ import annotations

from dataclasses import dataclass

from pg_promoter.domain.heartbeat import PromotionOutcome
from pg_promoter.domain.state import ControllerPhase


@dataclass(frozen=True)
class MetricCall:
    """Record of a single metric update.

    Attributes:
        metric_name: Name of the metric that was updated.
        value: Value that was set or recorded.
    """

    metric_name: str
    value: object


class FakeMetricsAdapter:
    """Fake implementation of MetricsPort for testing.

    Example:
        >>> fake = FakeMetricsAdapter()
        >>> fake.set_consecutive_failures(2)
        >>> fake.current_consecutive_failures
        2
    """

    def __init__(self) -> None:
        self._consecutive_failures: int | None = None
        self._phase: ControllerPhase | None = None
        self._heartbeats: list[bool] = []
        self._promotions: list[PromotionOutcome] = []
        self._calls: list[MetricCall] = []

    @property
    def calls(self) -> list[MetricCall]:
        """Return a copy of all metric update calls, in order."""
        return list(self._calls)

    @property
    def current_consecutive_failures(self) -> int | None:
        """Return last set failure tally, or None if never set."""
        return self._consecutive_failures

    @property
    def current_phase(self) -> ControllerPhase | None:
        """Return last set phase, or None if never set."""
        return self._phase

    @property
    def heartbeats(self) -> list[bool]:
        return list(self._heartbeats)

    @property
    def promotions(self) -> list[PromotionOutcome]:
        return list(self._promotions)

    def set_consecutive_failures(self, count: int) -> None:
        self._consecutive_failures = count
        self._calls.append(MetricCall("consecutive_failures", count))

    def record_heartbeat(self, success: bool) -> None:
        self._heartbeats.append(success)
        self._calls.append(MetricCall("heartbeat", success))

    def set_phase(self, phase: ControllerPhase) -> None:
        self._phase = phase
        self._calls.append(MetricCall("phase", phase))

    def record_promotion(self, outcome: PromotionOutcome) -> None:
        self._promotions.append(outcome)
        self._calls.append(MetricCall("promotion", outcome))

    def clear_calls(self) -> None:
        """Clear the recorded calls list.

        Does not reset current_* state values.
        """
        self._calls.clear()
