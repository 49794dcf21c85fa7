"""FailoverController use case: the standby's failover decision loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pg_promoter.adapters.metrics_port import NoOpMetricsAdapter
from pg_promoter.domain.events import FailoverEvent, FailoverEventType
from pg_promoter.domain.exceptions import HostPidError, PromoterConfigError
from pg_promoter.domain.settings import PromoterSettings
from pg_promoter.domain.state import ControllerPhase, ExitStatus, FailoverState

if TYPE_CHECKING:
    from pg_promoter.adapters.metrics_port import MetricsPort
    from pg_promoter.adapters.ports import (
        EventEmitterPort,
        HostPidResolverPort,
        LatchPort,
        SettingsSourcePort,
    )
    from pg_promoter.domain.interrupts import InterruptFlags
    from pg_promoter.usecases.heartbeat_monitor import HeartbeatMonitor
    from pg_promoter.usecases.promoter import Promoter

logger = logging.getLogger(__name__)


class FailoverController:
    """Drives heartbeats against the primary and promotes on repeated failure.

    Each loop iteration:
        1. waits up to keepalive_time seconds on the latch,
        2. exits with FAILURE if the host process died,
        3. exits with SUCCESS if shutdown was requested,
        4. applies a pending configuration reload,
        5. runs one heartbeat (success resets the tally, failure adds one),
        6. promotes once the tally reaches keepalive_count.

    A shutdown request is also honoured before the wait, so one that arrives
    during a heartbeat never waits out another interval.

    Promotion happens at most once. Whatever its outcome the loop terminates:
    SUCCESS if the host was signalled, FAILURE otherwise.

    Reload only changes keepalive_time and keepalive_count. The connection
    string, data directory and trigger file are fixed when the controller is
    created.

    Thread safety:
        Single-threaded. Only InterruptFlags and the latch are touched from
        signal handlers; all other state is owned by the loop.
    """

    def __init__(
        self,
        settings: PromoterSettings,
        settings_source: SettingsSourcePort,
        heartbeat_monitor: HeartbeatMonitor,
        promoter: Promoter,
        latch: LatchPort,
        interrupts: InterruptFlags,
        host_pid_resolver: HostPidResolverPort,
        metrics: MetricsPort | None = None,
        event_emitter: EventEmitterPort | None = None,
    ) -> None:
        """Initialize the failover controller.

        Args:
            settings: Settings snapshot the worker started with.
            settings_source: Port used to re-read settings on reload.
            heartbeat_monitor: Checks whether the primary is alive.
            promoter: Performs the promotion.
            latch: Wait primitive woken by timeouts, signals and host death.
            interrupts: Flags set by the signal handlers.
            host_pid_resolver: Finds the host pid to signal on promotion.
            metrics: Optional port for emitting metrics.
            event_emitter: Optional port for emitting failover events.
        """
        self._settings = settings
        self._settings_source = settings_source
        self._heartbeat_monitor = heartbeat_monitor
        self._promoter = promoter
        self._latch = latch
        self._interrupts = interrupts
        self._host_pid_resolver = host_pid_resolver
        self._metrics: MetricsPort = metrics or NoOpMetricsAdapter()
        self._event_emitter = event_emitter
        self._state = FailoverState()

    @property
    def settings(self) -> PromoterSettings:
        """Return the settings snapshot currently in effect."""
        return self._settings

    @property
    def phase(self) -> ControllerPhase:
        return self._state.phase

    @property
    def consecutive_failures(self) -> int:
        return self._state.consecutive_failures

    @property
    def promotion_attempted(self) -> bool:
        return self._state.promotion_attempted

    @property
    def exit_status(self) -> ExitStatus | None:
        """Return the exit status, or None while the loop has not terminated."""
        return self._state.exit_status

    def run(self) -> ExitStatus:
        """Run the loop until shutdown, host death or promotion.

        Returns:
            ExitStatus.SUCCESS after a shutdown request or a completed
            promotion, ExitStatus.FAILURE after host death or a failed
            promotion.
        """
        if self._state.phase is ControllerPhase.TERMINATED:
            raise RuntimeError("failover controller has already terminated")

        logger.info(
            f"Failover loop started: keepalive_time={self._settings.keepalive_time}s, "
            f"keepalive_count={self._settings.keepalive_count}"
        )
        self._metrics.set_phase(self._state.phase)
        self._metrics.set_consecutive_failures(self._state.consecutive_failures)

        while self._state.is_running:
            self._run_iteration()

        assert self._state.exit_status is not None
        return self._state.exit_status

    def _run_iteration(self) -> None:
        if self._interrupts.shutdown_requested:
            self._shutdown()
            return

        wake = self._latch.wait(self._settings.keepalive_time)
        self._latch.reset()

        if wake.host_died:
            logger.critical("Host process died, exiting without promotion")
            self._emit(FailoverEventType.HOST_DIED)
            self._terminate(ExitStatus.FAILURE)
            return

        if self._interrupts.shutdown_requested:
            self._shutdown()
            return

        if self._interrupts.consume_reload():
            self._reload()

        settings = self._settings
        self._heartbeat(settings)

        if self._state.consecutive_failures >= settings.keepalive_count:
            self._promote(settings)

    def _heartbeat(self, settings: PromoterSettings) -> None:
        previous_failures = self._state.consecutive_failures
        result = self._heartbeat_monitor.check(
            settings.primary_conninfo, previous_failures
        )
        self._metrics.record_heartbeat(result.is_alive)

        if result.is_alive:
            self._state.record_success()
            if previous_failures > 0:
                logger.info(
                    f"Primary server reachable again after {previous_failures} "
                    f"consecutive failures"
                )
                self._emit(FailoverEventType.HEARTBEAT_RECOVERED)
        else:
            failures = self._state.record_failure()
            logger.debug(
                f"Heartbeat failed ({failures}/{settings.keepalive_count})"
            )
            self._emit(FailoverEventType.HEARTBEAT_FAILED, result.error)

        self._metrics.set_consecutive_failures(self._state.consecutive_failures)

    def _reload(self) -> None:
        try:
            reloaded = self._settings_source.load()
        except PromoterConfigError as e:
            logger.error(f"Invalid configuration on reload, keeping previous settings: {e}")
            return

        current = self._settings
        fixed = ("primary_conninfo", "data_dir", "trigger_file")
        changed = [
            name for name in fixed if getattr(reloaded, name) != getattr(current, name)
        ]
        if changed:
            logger.warning(
                f"Changes to {', '.join(changed)} take effect only after a restart"
            )

        self._settings = current.with_reloaded(reloaded)
        logger.info(
            f"Configuration reloaded: keepalive_time={self._settings.keepalive_time}s, "
            f"keepalive_count={self._settings.keepalive_count}"
        )
        self._emit(FailoverEventType.CONFIG_RELOADED)

    def _promote(self, settings: PromoterSettings) -> None:
        self._set_phase(ControllerPhase.PROMOTING)
        logger.error(
            f"Primary server unreachable for {self._state.consecutive_failures} "
            f"consecutive heartbeats, promoting standby"
        )
        self._emit(FailoverEventType.PROMOTION_STARTED)

        try:
            host_pid = self._host_pid_resolver.resolve()
        except HostPidError as e:
            logger.error(f"Promotion aborted, could not resolve host pid: {e}")
            self._emit(FailoverEventType.PROMOTION_FAILED, str(e))
            self._terminate(ExitStatus.FAILURE)
            return

        self._state.promotion_attempted = True
        result = self._promoter.promote(
            settings.data_dir, settings.trigger_file, host_pid
        )
        self._metrics.record_promotion(result.outcome)

        if result.succeeded:
            self._emit(FailoverEventType.PROMOTED)
            self._terminate(ExitStatus.SUCCESS)
        else:
            self._emit(FailoverEventType.PROMOTION_FAILED, result.error)
            self._terminate(ExitStatus.FAILURE)

    def _shutdown(self) -> None:
        logger.info("Shutdown requested, exiting failover loop")
        self._emit(FailoverEventType.SHUTDOWN)
        self._terminate(ExitStatus.SUCCESS)

    def _set_phase(self, phase: ControllerPhase) -> None:
        self._state.phase = phase
        self._metrics.set_phase(phase)

    def _terminate(self, status: ExitStatus) -> None:
        self._state.terminate(status)
        self._metrics.set_phase(ControllerPhase.TERMINATED)

    def _emit(self, event_type: FailoverEventType, reason: str | None = None) -> None:
        if self._event_emitter is not None:
            self._event_emitter.emit(FailoverEvent(event_type=event_type, reason=reason))
