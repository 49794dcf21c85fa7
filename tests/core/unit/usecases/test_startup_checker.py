"""Unit tests for StartupChecker use case."""

import pytest

from pg_promoter.adapters.fakes import FakeConnectionFactory
from pg_promoter.domain.exceptions import PrimaryConnectionError, StartupCheckError
from pg_promoter.usecases.startup_checker import StartupChecker


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.StartupChecker")
class TestStartupChecker:
    """Tests for the startup connectivity check."""

    def test_reachable_primary_passes(self) -> None:
        factory = FakeConnectionFactory()

        StartupChecker(factory).verify("host=primary")

        assert factory.conninfos == ["host=primary"]
        assert factory.open_connections == 0

    def test_runs_no_query(self) -> None:
        factory = FakeConnectionFactory()
        StartupChecker(factory).verify("host=primary")
        assert factory.handles[0].queries == []

    def test_unreachable_primary_raises(self) -> None:
        factory = FakeConnectionFactory(default=PrimaryConnectionError("no route to host"))

        with pytest.raises(StartupCheckError, match="connection confirm failed") as exc_info:
            StartupChecker(factory).verify("host=primary")

        assert exc_info.value.conninfo == "host=primary"
        assert isinstance(exc_info.value.__cause__, PrimaryConnectionError)
