"""Promoter use case: turn the standby into a primary."""

from __future__ import annotations

import logging
import os
import signal
from pathlib import Path

from pg_promoter.adapters.ports import OsSignalSender, SignalSenderPort
from pg_promoter.domain.exceptions import PromotionAlreadyAttemptedError
from pg_promoter.domain.heartbeat import PromotionOutcome, PromotionResult

logger = logging.getLogger(__name__)


class Promoter:
    """Performs the irreversible promotion of the standby.

    Promotion has two phases that are reported separately:

    1. Commit the artifact: create (or truncate) the trigger file inside the
       data directory, sync it and close it. The host only treats a promotion
       signal as genuine when this file exists.
    2. Notify: send the promotion signal to the host process.

    If phase 1 fails nothing is signalled. If phase 2 fails the trigger file
    stays on disk. Neither phase is retried, and a Promoter can be used for
    at most one attempt.
    """

    def __init__(
        self,
        signal_sender: SignalSenderPort | None = None,
        promote_signal: int = signal.SIGUSR1,
    ) -> None:
        """Initialize the promoter.

        Args:
            signal_sender: Port implementation for signalling the host.
                Defaults to OsSignalSender.
            promote_signal: Signal number that asks the host to promote.
                Defaults to SIGUSR1.
        """
        self._signal_sender = signal_sender or OsSignalSender()
        self._promote_signal = promote_signal
        self._attempted = False

    @property
    def attempted(self) -> bool:
        """True once promote() has been called."""
        return self._attempted

    def promote(
        self, data_dir: str | Path, trigger_file_name: str, host_pid: int
    ) -> PromotionResult:
        """Write the trigger file and signal the host.

        Args:
            data_dir: Data directory of the standby.
            trigger_file_name: Name of the trigger file inside data_dir.
            host_pid: Process id of the host to signal.

        Returns:
            PromotionResult with outcome PROMOTED, ARTIFACT_FAILED or
            SIGNAL_FAILED.

        Raises:
            PromotionAlreadyAttemptedError: If called more than once.
        """
        trigger_path = Path(data_dir) / trigger_file_name
        if self._attempted:
            raise PromotionAlreadyAttemptedError(
                "promotion was already attempted by this process", trigger_path
            )
        self._attempted = True

        logger.info(f"Promoting standby: writing trigger file {trigger_path}")
        try:
            with trigger_path.open("w") as trigger_file:
                os.fsync(trigger_file.fileno())
        except OSError as e:
            error = f"could not create or close trigger file {trigger_path}: {e}"
            logger.error(f"Promotion aborted, {error}")
            return PromotionResult(
                outcome=PromotionOutcome.ARTIFACT_FAILED,
                trigger_path=trigger_path,
                host_pid=host_pid,
                error=error,
            )

        signal_name = signal.Signals(self._promote_signal).name
        try:
            self._signal_sender.send(host_pid, self._promote_signal)
        except OSError as e:
            error = f"failed to send {signal_name} to host process {host_pid}: {e}"
            logger.critical(
                f"Promotion incomplete, {error}; trigger file {trigger_path} "
                f"remains on disk"
            )
            return PromotionResult(
                outcome=PromotionOutcome.SIGNAL_FAILED,
                trigger_path=trigger_path,
                host_pid=host_pid,
                error=error,
            )

        logger.info(f"Sent {signal_name} to host process {host_pid}, promotion requested")
        return PromotionResult(
            outcome=PromotionOutcome.PROMOTED,
            trigger_path=trigger_path,
            host_pid=host_pid,
        )
