"""Startup checker use case: confirm the primary is reachable before looping."""

from __future__ import annotations

import logging

from pg_promoter.adapters.ports import ConnectionFactoryPort
from pg_promoter.domain.exceptions import PrimaryUnavailableError, StartupCheckError

logger = logging.getLogger(__name__)


class StartupChecker:
    """Confirms a connection to the primary can be established at startup.

    Entering the failover loop without ever having seen the primary would
    let a misconfigured standby promote itself on its first heartbeat, so
    the worker exits instead.
    """

    def __init__(self, connection_factory: ConnectionFactoryPort) -> None:
        """Initialize the startup checker.

        Args:
            connection_factory: Port implementation for opening connections.
        """
        self._connection_factory = connection_factory

    def verify(self, conninfo: str) -> None:
        """Open and release one connection to the primary.

        Args:
            conninfo: Connection string of the primary.

        Raises:
            StartupCheckError: If the connection cannot be established.
        """
        try:
            with self._connection_factory.connect(conninfo):
                pass
        except PrimaryUnavailableError as e:
            logger.error(f"Could not establish connection to primary server: {e}")
            raise StartupCheckError(
                f"connection confirm failed: {e}", conninfo=conninfo
            ) from e
        logger.info("Connection to primary server confirmed")
