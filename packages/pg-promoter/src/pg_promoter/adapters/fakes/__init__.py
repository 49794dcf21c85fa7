"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without a database, real signals or sleeping.
"""

from pg_promoter.adapters.fakes.fake_connection import (
    FakeConnectionFactory,
    FakeConnectionHandle,
)
from pg_promoter.adapters.fakes.fake_host import FakeHostPidResolver, FakeSignalSender
from pg_promoter.adapters.fakes.fake_latch import FakeLatch
from pg_promoter.adapters.fakes.fake_metrics import FakeMetricsAdapter, MetricCall
from pg_promoter.adapters.fakes.fake_settings_source import (
    FakeEventEmitter,
    FakeSettingsSource,
)

__all__ = [
    "FakeConnectionFactory",
    "FakeConnectionHandle",
    "FakeHostPidResolver",
    "FakeSignalSender",
    "FakeLatch",
    "FakeMetricsAdapter",
    "MetricCall",
    "FakeEventEmitter",
    "FakeSettingsSource",
]
