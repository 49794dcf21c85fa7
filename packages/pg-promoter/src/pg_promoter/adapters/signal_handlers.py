"""Installation of the worker's asynchronous signal handlers.

Handlers only flip InterruptFlags and set the latch. Everything else
happens in the controller loop once the latch wait returns.
"""

from __future__ import annotations

import logging
import signal
from collections.abc import Callable
from types import FrameType
from typing import Any, Union

from pg_promoter.adapters.ports import LatchPort
from pg_promoter.domain.interrupts import InterruptFlags

logger = logging.getLogger(__name__)

# What signal.signal() returns: a callable, SIG_DFL/SIG_IGN, or None
PreviousHandler = Union[Callable[[int, Union[FrameType, None]], Any], int, None]

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)
RELOAD_SIGNALS = (signal.SIGHUP,)


def install_signal_handlers(
    flags: InterruptFlags, latch: LatchPort
) -> dict[int, PreviousHandler]:
    """Route shutdown and reload signals into *flags* and wake *latch*.

    SIGTERM and SIGINT request shutdown; SIGHUP requests a configuration
    reload. Must be called from the main thread.

    Args:
        flags: Interrupt flags read by the controller loop.
        latch: Latch the controller waits on.

    Returns:
        Mapping of signal number to the handler it replaced, for
        restore_signal_handlers().
    """

    def _on_shutdown(signum: int, frame: FrameType | None) -> None:
        flags.request_shutdown()
        latch.set()

    def _on_reload(signum: int, frame: FrameType | None) -> None:
        flags.request_reload()
        latch.set()

    previous: dict[int, PreviousHandler] = {}
    try:
        for signum in SHUTDOWN_SIGNALS:
            previous[signum] = signal.signal(signum, _on_shutdown)
        for signum in RELOAD_SIGNALS:
            previous[signum] = signal.signal(signum, _on_reload)
    except ValueError:
        # not the main thread; put back whatever was already replaced
        restore_signal_handlers(previous)
        raise

    logger.debug(f"Installed signal handlers for {sorted(previous)}")
    return previous


def restore_signal_handlers(previous: dict[int, PreviousHandler]) -> None:
    """Put back the handlers returned by install_signal_handlers()."""
    for signum, handler in previous.items():
        # None means the previous handler was not installed from Python
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
