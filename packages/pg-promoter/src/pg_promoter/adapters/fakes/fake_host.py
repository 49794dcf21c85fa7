"""Fakes for the host process: pid resolution and signal delivery."""

from __future__ import annotations

from pathlib import Path

from pg_promoter.domain.exceptions import HostPidError


class FakeHostPidResolver:
    """Fake implementation of HostPidResolverPort."""

    def __init__(self, pid: int = 4242) -> None:
        self._pid = pid
        self._error: HostPidError | None = None
        self.resolve_count = 0

    def set_error(self, message: str | None) -> None:
        """Make resolve() raise HostPidError (or stop raising with None)."""
        self._error = (
            HostPidError(message, Path("postmaster.pid")) if message is not None else None
        )

    def resolve(self) -> int:
        self.resolve_count += 1
        if self._error is not None:
            raise self._error
        return self._pid


class FakeSignalSender:
    """Fake implementation of SignalSenderPort recording every send."""

    def __init__(self) -> None:
        self._error: OSError | None = None
        self.sent: list[tuple[int, int]] = []

    def set_error(self, error: OSError | None) -> None:
        """Make send() raise *error* (or stop raising with None)."""
        self._error = error

    def send(self, pid: int, signum: int) -> None:
        if self._error is not None:
            raise self._error
        self.sent.append((pid, signum))
