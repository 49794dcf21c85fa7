"""Unit tests for the psycopg connection adapter.

psycopg.connect is replaced with a stub so no server is needed.
"""

from __future__ import annotations

from typing import Any

import psycopg
import pytest

from pg_promoter.adapters import psycopg_connection
from pg_promoter.adapters.ports import ConnectionFactoryPort
from pg_promoter.adapters.psycopg_connection import PsycopgConnectionFactory
from pg_promoter.domain.exceptions import PrimaryConnectionError, PrimaryQueryError


class StubCursor:
    def __init__(self, rows: list[tuple[Any, ...]], error: Exception | None) -> None:
        self._rows = rows
        self._error = error
        self.executed: list[str] = []

    def __enter__(self) -> StubCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def execute(self, query: str) -> None:
        self.executed.append(query)
        if self._error is not None:
            raise self._error

    def fetchall(self) -> list[tuple[Any, ...]]:
        return self._rows


class StubConnection:
    def __init__(
        self, rows: list[tuple[Any, ...]] | None = None, error: Exception | None = None
    ) -> None:
        self.cursor_obj = StubCursor(rows if rows is not None else [(1,)], error)
        self.closed = False

    def cursor(self) -> StubCursor:
        return self.cursor_obj

    def close(self) -> None:
        self.closed = True


class StubConnect:
    """Stand-in for psycopg.connect recording its arguments."""

    def __init__(self, result: StubConnection | Exception) -> None:
        self._result = result
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, conninfo: str, **kwargs: Any) -> StubConnection:
        self.calls.append((conninfo, kwargs))
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


@pytest.fixture
def stub_connect(monkeypatch: pytest.MonkeyPatch):
    def _install(result: StubConnection | Exception) -> StubConnect:
        stub = StubConnect(result)
        monkeypatch.setattr(psycopg_connection.psycopg, "connect", stub)
        return stub

    return _install


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.PsycopgConnection")
class TestPsycopgConnectionFactory:
    """Tests for connection handling and error translation."""

    def test_implements_connection_factory_port(self) -> None:
        assert isinstance(PsycopgConnectionFactory(), ConnectionFactoryPort)

    def test_connects_with_timeouts_and_autocommit(self, stub_connect) -> None:
        stub = stub_connect(StubConnection())

        with PsycopgConnectionFactory(connect_timeout=3).connect("host=primary"):
            pass

        conninfo, kwargs = stub.calls[0]
        assert conninfo == "host=primary"
        assert kwargs["autocommit"] is True
        assert kwargs["connect_timeout"] == 3

    def test_stalled_query_is_bounded(self, stub_connect) -> None:
        stub = stub_connect(StubConnection())

        with PsycopgConnectionFactory(connect_timeout=3).connect("host=primary"):
            pass

        kwargs = stub.calls[0][1]
        assert kwargs["options"] == "-c statement_timeout=3000"
        assert kwargs["tcp_user_timeout"] == 3000
        assert kwargs["keepalives"] == 1
        assert kwargs["keepalives_idle"] == 3
        assert kwargs["keepalives_count"] == 3

    def test_execute_returns_rows(self, stub_connect) -> None:
        connection = StubConnection(rows=[(1,)])
        stub_connect(connection)

        with PsycopgConnectionFactory().connect("host=primary") as handle:
            rows = handle.execute("SELECT 1")

        assert rows == [(1,)]
        assert connection.cursor_obj.executed == ["SELECT 1"]

    def test_connection_closed_on_exit(self, stub_connect) -> None:
        connection = StubConnection()
        stub_connect(connection)

        with PsycopgConnectionFactory().connect("host=primary"):
            assert not connection.closed

        assert connection.closed

    def test_connect_error_is_translated(self, stub_connect) -> None:
        stub_connect(psycopg.OperationalError("connection refused"))

        with pytest.raises(PrimaryConnectionError, match="could not connect"):
            with PsycopgConnectionFactory().connect("host=primary"):
                pass

    def test_query_error_is_translated_and_connection_closed(self, stub_connect) -> None:
        connection = StubConnection(error=psycopg.OperationalError("server closed"))
        stub_connect(connection)

        with pytest.raises(PrimaryQueryError, match="query failed"):
            with PsycopgConnectionFactory().connect("host=primary") as handle:
                handle.execute("SELECT 1")

        assert connection.closed

    def test_default_connect_timeout(self) -> None:
        assert PsycopgConnectionFactory().connect_timeout == 5
