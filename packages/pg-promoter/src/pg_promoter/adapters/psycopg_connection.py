"""psycopg adapter for connecting to the primary server.

Implements ConnectionFactoryPort on top of psycopg 3. Driver errors are
translated into domain exceptions so use cases never import psycopg.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg

from pg_promoter.domain.exceptions import PrimaryConnectionError, PrimaryQueryError
from pg_promoter.domain.settings import DEFAULT_CONNECT_TIMEOUT

logger = logging.getLogger(__name__)

# unanswered TCP keepalive probes before the connection is dropped
KEEPALIVE_PROBES = 3


class PsycopgConnectionHandle:
    """ConnectionHandle backed by an open psycopg connection."""

    def __init__(self, connection: psycopg.Connection[Any]) -> None:
        self._connection = connection

    def execute(self, query: str) -> list[tuple[Any, ...]]:
        """Execute *query* and return every row.

        Raises:
            PrimaryQueryError: If psycopg reports an error.
        """
        try:
            with self._connection.cursor() as cursor:
                cursor.execute(query)
                return cursor.fetchall()
        except psycopg.Error as e:
            raise PrimaryQueryError(f"query failed: {e}") from e


class PsycopgConnectionFactory:
    """Open short-lived psycopg connections to the primary.

    Every connection is opened in autocommit mode. connect_timeout also
    bounds the query through statement_timeout and TCP timeouts, so a
    primary that accepts the connection and then stalls fails the heartbeat
    instead of blocking the loop.

    Example:
        >>> factory = PsycopgConnectionFactory(connect_timeout=3)
        >>> with factory.connect("host=primary dbname=postgres") as conn:
        ...     conn.execute("SELECT 1")
        [(1,)]
    """

    def __init__(self, connect_timeout: int = DEFAULT_CONNECT_TIMEOUT) -> None:
        """Initialize the factory.

        Args:
            connect_timeout: Seconds a connection attempt or query may take.
        """
        self._connect_timeout = connect_timeout

    @property
    def connect_timeout(self) -> int:
        return self._connect_timeout

    def connection_params(self) -> dict[str, Any]:
        """Return the libpq parameters that bound a single heartbeat."""
        timeout_ms = self._connect_timeout * 1000
        return {
            "connect_timeout": self._connect_timeout,
            "options": f"-c statement_timeout={timeout_ms}",
            "keepalives": 1,
            "keepalives_idle": self._connect_timeout,
            "keepalives_interval": 1,
            "keepalives_count": KEEPALIVE_PROBES,
            "tcp_user_timeout": timeout_ms,
        }

    @contextmanager
    def connect(self, conninfo: str) -> Iterator[PsycopgConnectionHandle]:
        """Open a connection and close it when the context exits.

        Raises:
            PrimaryConnectionError: If the connection cannot be established.
        """
        try:
            connection = psycopg.connect(
                conninfo, autocommit=True, **self.connection_params()
            )
        except psycopg.Error as e:
            raise PrimaryConnectionError(f"could not connect: {e}") from e

        try:
            yield PsycopgConnectionHandle(connection)
        finally:
            connection.close()
            logger.debug("Closed connection to primary")
