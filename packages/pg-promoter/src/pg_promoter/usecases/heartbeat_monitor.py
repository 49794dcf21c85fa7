"""Heartbeat monitor use case for checking that the primary is alive."""

from __future__ import annotations

import logging

from pg_promoter.adapters.ports import ConnectionFactoryPort
from pg_promoter.domain.exceptions import PrimaryConnectionError, PrimaryQueryError
from pg_promoter.domain.heartbeat import HeartbeatFailure, HeartbeatResult

logger = logging.getLogger(__name__)

LIVENESS_QUERY = "SELECT 1"


class HeartbeatMonitor:
    """Checks whether the primary server answers a trivial query.

    One heartbeat opens a connection, runs SELECT 1 and releases the
    connection. The primary is alive only if the query returns exactly one
    row. Connection and query errors are turned into a failed result and a
    warning; they never propagate.

    This is a stateless component: the caller owns the failure tally and
    passes it in so log lines can show it.
    """

    def __init__(self, connection_factory: ConnectionFactoryPort) -> None:
        """Initialize the heartbeat monitor.

        Args:
            connection_factory: Port implementation for opening connections
                to the primary.
        """
        self._connection_factory = connection_factory

    def check(self, conninfo: str, consecutive_failures: int = 0) -> HeartbeatResult:
        """Run one heartbeat against the primary.

        Args:
            conninfo: Connection string of the primary.
            consecutive_failures: Failures counted before this attempt. Only
                used for log output.

        Returns:
            HeartbeatResult describing whether the primary answered and, if
            not, whether connecting or retrieving the result failed.
        """
        tally = consecutive_failures + 1
        try:
            with self._connection_factory.connect(conninfo) as connection:
                rows = connection.execute(LIVENESS_QUERY)
        except PrimaryConnectionError as e:
            logger.warning(
                f"Could not establish connection to primary server "
                f"(consecutive failures: {tally}): {e}"
            )
            return HeartbeatResult.failed(HeartbeatFailure.CONNECT, str(e))
        except PrimaryQueryError as e:
            logger.warning(
                f"Could not retrieve expected result from primary server "
                f"(consecutive failures: {tally}): {e}"
            )
            return HeartbeatResult.failed(HeartbeatFailure.RESULT, str(e))

        if len(rows) != 1:
            error = f"expected exactly 1 row, got {len(rows)}"
            logger.warning(
                f"Could not retrieve expected result from primary server "
                f"(consecutive failures: {tally}): {error}"
            )
            return HeartbeatResult.failed(HeartbeatFailure.RESULT, error)

        logger.debug("Primary server answered heartbeat")
        return HeartbeatResult.alive()

    def check_primary_alive(self, conninfo: str, consecutive_failures: int = 0) -> bool:
        """Return True if the primary answered one heartbeat.

        See check() for details.
        """
        return self.check(conninfo, consecutive_failures).is_alive
