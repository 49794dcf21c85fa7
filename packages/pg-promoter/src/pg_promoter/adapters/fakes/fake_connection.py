"""Fake connection factory for testing.

Plays back a script of heartbeat outcomes without touching a database.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Union

from pg_promoter.domain.exceptions import PrimaryConnectionError, PrimaryQueryError

Rows = list[tuple[Any, ...]]
# Rows to return, or the error to raise on connect/execute
Outcome = Union[Rows, PrimaryConnectionError, PrimaryQueryError]

ALIVE_ROWS: Rows = [(1,)]


class FakeConnectionHandle:
    """ConnectionHandle that returns scripted rows or raises a query error."""

    def __init__(self, outcome: Rows | PrimaryQueryError) -> None:
        self._outcome = outcome
        self.queries: list[str] = []

    def execute(self, query: str) -> list[tuple[Any, ...]]:
        self.queries.append(query)
        if isinstance(self._outcome, PrimaryQueryError):
            raise self._outcome
        return list(self._outcome)


class FakeConnectionFactory:
    """Fake implementation of ConnectionFactoryPort.

    Each connect() consumes the next scripted outcome. When the script is
    exhausted the default outcome is used (alive unless changed).

    Example:
        >>> factory = FakeConnectionFactory()
        >>> factory.queue_heartbeats([False, False, True])
        >>> factory.opened, factory.closed
        (0, 0)
    """

    def __init__(self, default: Outcome | None = None) -> None:
        self._script: deque[Outcome] = deque()
        self._default: Outcome = ALIVE_ROWS if default is None else default
        self.conninfos: list[str] = []
        self.handles: list[FakeConnectionHandle] = []
        self.opened = 0
        self.closed = 0

    @property
    def open_connections(self) -> int:
        """Connections opened but not yet released."""
        return self.opened - self.closed

    def queue(self, outcome: Outcome) -> None:
        """Append one outcome to the script."""
        self._script.append(outcome)

    def queue_heartbeats(self, results: Iterable[bool]) -> None:
        """Append alive (True) or unreachable (False) outcomes."""
        for alive in results:
            if alive:
                self.queue(ALIVE_ROWS)
            else:
                self.queue(PrimaryConnectionError("connection refused"))

    def set_default(self, outcome: Outcome) -> None:
        """Set the outcome used once the script is exhausted."""
        self._default = outcome

    @contextmanager
    def connect(self, conninfo: str) -> Iterator[FakeConnectionHandle]:
        self.conninfos.append(conninfo)
        outcome = self._script.popleft() if self._script else self._default
        if isinstance(outcome, PrimaryConnectionError):
            raise outcome

        handle = FakeConnectionHandle(outcome)
        self.handles.append(handle)
        self.opened += 1
        try:
            yield handle
        finally:
            self.closed += 1
