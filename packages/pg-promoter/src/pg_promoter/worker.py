"""Promoter worker: process-level lifecycle around the failover loop."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pg_promoter.adapters.latch import ProcessLatch
from pg_promoter.adapters.metrics_port import MetricsPort
from pg_promoter.adapters.ports import (
    ConnectionFactoryPort,
    EventEmitterPort,
    HostPidResolverPort,
    LatchPort,
    SettingsSourcePort,
    SignalSenderPort,
)
from pg_promoter.adapters.signal_handlers import (
    PreviousHandler,
    install_signal_handlers,
    restore_signal_handlers,
)
from pg_promoter.domain.exceptions import (
    HostPidError,
    PromoterConfigError,
    StartupCheckError,
)
from pg_promoter.domain.interrupts import InterruptFlags
from pg_promoter.domain.state import ExitStatus
from pg_promoter.factories import (
    PrometheusNotInstalledError,
    create_connection_factory,
    create_controller,
    create_host_pid_resolver,
    create_metrics,
)
from pg_promoter.usecases.startup_checker import StartupChecker

logger = logging.getLogger(__name__)


class PromoterWorker:
    """Runs one generation of the promoter worker.

    Startup order:
        1. load settings (invalid configuration -> FAILURE),
        2. confirm the primary is reachable (unreachable -> FAILURE),
        3. resolve the host pid and start watching it (unresolvable -> FAILURE),
        4. start the metrics exporter when enabled (cannot start -> FAILURE),
        5. install signal handlers and run the failover loop.

    Signal handlers are restored and the latch is closed when the loop exits.
    All collaborators can be injected; anything not given uses the real
    adapters.
    """

    def __init__(
        self,
        settings_source: SettingsSourcePort,
        connection_factory: ConnectionFactoryPort | None = None,
        host_pid_resolver: HostPidResolverPort | None = None,
        signal_sender: SignalSenderPort | None = None,
        latch_factory: Callable[[int], LatchPort] = ProcessLatch,
        metrics: MetricsPort | None = None,
        event_emitter: EventEmitterPort | None = None,
        log_level: str | None = None,
    ) -> None:
        self._log_level = log_level
        self._settings_source = settings_source
        self._connection_factory = connection_factory
        self._host_pid_resolver = host_pid_resolver
        self._signal_sender = signal_sender
        self._latch_factory = latch_factory
        self._metrics = metrics
        self._event_emitter = event_emitter
        self._interrupts = InterruptFlags()

    @property
    def interrupts(self) -> InterruptFlags:
        return self._interrupts

    def run(self) -> ExitStatus:
        """Start up and run the failover loop.

        Returns:
            The process exit status.
        """
        try:
            settings = self._settings_source.load()
        except PromoterConfigError as e:
            logger.error(f"Invalid configuration: {e}")
            return ExitStatus.FAILURE

        # an explicit level (e.g. from the command line) beats the config file
        logging.getLogger("pg_promoter").setLevel(self._log_level or settings.log_level)

        connection_factory = self._connection_factory or create_connection_factory(settings)
        try:
            StartupChecker(connection_factory).verify(settings.primary_conninfo)
        except StartupCheckError:
            return ExitStatus.FAILURE

        host_pid_resolver = self._host_pid_resolver or create_host_pid_resolver(settings)
        try:
            host_pid = host_pid_resolver.resolve()
        except HostPidError as e:
            logger.error(f"Could not resolve host process: {e}")
            return ExitStatus.FAILURE

        metrics = self._metrics
        if metrics is None:
            try:
                metrics = create_metrics(settings)
            except (PrometheusNotInstalledError, OSError) as e:
                logger.error(f"Could not start metrics exporter: {e}")
                return ExitStatus.FAILURE

        latch = self._latch_factory(host_pid)
        previous_handlers: dict[int, PreviousHandler] = {}
        try:
            previous_handlers = install_signal_handlers(self._interrupts, latch)
            logger.info(
                f"pg-promoter watching host process {host_pid}, "
                f"trigger file {settings.trigger_path}"
            )
            controller = create_controller(
                settings=settings,
                settings_source=self._settings_source,
                latch=latch,
                interrupts=self._interrupts,
                connection_factory=connection_factory,
                host_pid_resolver=host_pid_resolver,
                signal_sender=self._signal_sender,
                metrics=metrics,
                event_emitter=self._event_emitter,
            )
            status = controller.run()
        finally:
            restore_signal_handlers(previous_handlers)
            latch.close()

        logger.info(f"pg-promoter exiting with status {status.name}")
        return status
