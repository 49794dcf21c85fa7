"""Port interfaces for the pg-promoter core package.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pg_promoter.domain.events import FailoverEvent
    from pg_promoter.domain.interrupts import WakeResult
    from pg_promoter.domain.settings import PromoterSettings


@runtime_checkable
class ConnectionHandle(Protocol):
    """An open connection to the primary server.

    Handles are ephemeral: opened and closed within a single heartbeat and
    never shared.

    Contract:
        - execute(query) runs the query and returns all result rows
        - Raises PrimaryQueryError if the query fails
    """

    def execute(self, query: str) -> list[tuple[Any, ...]]:
        """Execute a query and return every row.

        Args:
            query: SQL text to execute.

        Returns:
            List of result rows (may be empty).

        Raises:
            PrimaryQueryError: If execution failed.
        """
        ...


@runtime_checkable
class ConnectionFactoryPort(Protocol):
    """Port interface for opening connections to the primary server.

    Contract:
        - connect(conninfo) returns a context manager yielding a ConnectionHandle
        - Leaving the context always releases the connection
        - Raises PrimaryConnectionError if the connection cannot be established
    """

    def connect(self, conninfo: str) -> AbstractContextManager[ConnectionHandle]:
        """Open a connection to the primary.

        Args:
            conninfo: libpq connection string.

        Returns:
            Context manager yielding an open ConnectionHandle.

        Raises:
            PrimaryConnectionError: If the connection cannot be established.
        """
        ...


@runtime_checkable
class LatchPort(Protocol):
    """Port interface for the loop's single blocking wait primitive.

    Contract:
        - wait(timeout) blocks until the timeout elapses, the latch is set,
          or the host process dies, and reports which of these happened
        - set() may be called from a signal handler
        - reset() clears a set latch; call it after every wait
        - close() releases any resources; the latch is unusable afterwards
    """

    def wait(self, timeout: float) -> WakeResult:
        """Block for at most *timeout* seconds.

        Args:
            timeout: Upper bound on the wait, in seconds.

        Returns:
            WakeResult naming every reason the wait ended.
        """
        ...

    def set(self) -> None:
        """Wake up a waiter (or make the next wait return immediately)."""
        ...

    def reset(self) -> None:
        """Clear the latch."""
        ...

    def close(self) -> None:
        """Release resources held by the latch."""
        ...


@runtime_checkable
class HostPidResolverPort(Protocol):
    """Port interface for finding the host (postmaster) process id.

    Contract:
        - resolve() returns a positive process id
        - Raises HostPidError if the pid cannot be determined
    """

    def resolve(self) -> int:
        """Return the host process id.

        Raises:
            HostPidError: If the pid cannot be determined.
        """
        ...


@runtime_checkable
class SignalSenderPort(Protocol):
    """Port interface for delivering a signal to another process.

    Contract:
        - send(pid, signum) delivers the signal or raises OSError
    """

    def send(self, pid: int, signum: int) -> None:
        """Send *signum* to process *pid*.

        Raises:
            OSError: If the signal could not be delivered.
        """
        ...


@runtime_checkable
class SettingsSourcePort(Protocol):
    """Port interface for loading configuration snapshots.

    Contract:
        - load() returns a fresh, validated PromoterSettings every call
        - Raises PromoterConfigError if the configuration is invalid
    """

    def load(self) -> PromoterSettings:
        """Load the current configuration.

        Raises:
            PromoterConfigError: If the configuration is invalid.
        """
        ...


@runtime_checkable
class EventEmitterPort(Protocol):
    """Port interface for emitting failover events.

    Contract:
        - emit(event) delivers the event to all registered observers
        - emit() is fire-and-forget (no return value, no exceptions propagated)
    """

    def emit(self, event: FailoverEvent) -> None:
        """Emit a failover event to observers.

        Args:
            event: The FailoverEvent to emit.
        """
        ...


class OsSignalSender:
    """Default implementation: deliver signals with os.kill()."""

    def send(self, pid: int, signum: int) -> None:
        """Send *signum* to *pid* using os.kill().

        Raises:
            OSError: If the process does not exist or may not be signalled.
        """
        os.kill(pid, signum)
