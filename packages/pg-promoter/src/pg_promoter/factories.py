"""Factory functions for wiring the failover loop.

Provides factory methods to build the controller and the metrics adapter
from settings. Handles the optional prometheus-client dependency gracefully.
"""

from __future__ import annotations

from pg_promoter.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from pg_promoter.adapters.pid_file import PostmasterPidFile
from pg_promoter.adapters.ports import (
    ConnectionFactoryPort,
    EventEmitterPort,
    HostPidResolverPort,
    LatchPort,
    SettingsSourcePort,
    SignalSenderPort,
)
from pg_promoter.adapters.psycopg_connection import PsycopgConnectionFactory
from pg_promoter.domain.interrupts import InterruptFlags
from pg_promoter.domain.settings import PromoterSettings
from pg_promoter.usecases.failover_controller import FailoverController
from pg_promoter.usecases.heartbeat_monitor import HeartbeatMonitor
from pg_promoter.usecases.promoter import Promoter


class PrometheusNotInstalledError(ImportError):
    """Raised when metrics are enabled but prometheus-client is not installed.

    Install with: pip install pg-promoter[metrics]
    """

    def __init__(self) -> None:
        super().__init__(
            "prometheus-client is not installed. "
            "Install with: pip install pg-promoter[metrics]"
        )


def create_connection_factory(settings: PromoterSettings) -> ConnectionFactoryPort:
    """Create the psycopg connection factory configured by *settings*."""
    return PsycopgConnectionFactory(connect_timeout=settings.connect_timeout)


def create_host_pid_resolver(settings: PromoterSettings) -> HostPidResolverPort:
    """Create a resolver reading the pid file inside the data directory."""
    return PostmasterPidFile(settings.pid_file_path)


def create_metrics(settings: PromoterSettings) -> MetricsPort:
    """Create the metrics adapter and start its exporter when enabled.

    Args:
        settings: Settings; metrics are enabled when metrics_port is set.

    Returns:
        PrometheusMetricsAdapter serving on metrics_port, or
        NoOpMetricsAdapter when metrics are disabled.

    Raises:
        PrometheusNotInstalledError: If metrics are enabled but
            prometheus-client is not installed.
    """
    if settings.metrics_port is None:
        return NoOpMetricsAdapter()

    try:
        from prometheus_client import start_http_server
    except ImportError as exc:
        raise PrometheusNotInstalledError() from exc

    from pg_promoter.adapters.prometheus_metrics import PrometheusMetricsAdapter

    adapter = PrometheusMetricsAdapter()
    start_http_server(settings.metrics_port)
    return adapter


def create_controller(
    settings: PromoterSettings,
    settings_source: SettingsSourcePort,
    latch: LatchPort,
    interrupts: InterruptFlags,
    connection_factory: ConnectionFactoryPort | None = None,
    host_pid_resolver: HostPidResolverPort | None = None,
    signal_sender: SignalSenderPort | None = None,
    metrics: MetricsPort | None = None,
    event_emitter: EventEmitterPort | None = None,
) -> FailoverController:
    """Create a FailoverController with real adapters for anything not given.

    Args:
        settings: Settings snapshot the worker started with.
        settings_source: Source re-read on reload.
        latch: Latch the loop waits on.
        interrupts: Flags set by the signal handlers.
        connection_factory: Defaults to a psycopg factory.
        host_pid_resolver: Defaults to the pid file inside data_dir.
        signal_sender: Defaults to os.kill().
        metrics: Defaults to no metrics.
        event_emitter: Defaults to no events.

    Returns:
        A FailoverController ready to run().
    """
    if connection_factory is None:
        connection_factory = create_connection_factory(settings)
    if host_pid_resolver is None:
        host_pid_resolver = create_host_pid_resolver(settings)

    return FailoverController(
        settings=settings,
        settings_source=settings_source,
        heartbeat_monitor=HeartbeatMonitor(connection_factory),
        promoter=Promoter(signal_sender=signal_sender),
        latch=latch,
        interrupts=interrupts,
        host_pid_resolver=host_pid_resolver,
        metrics=metrics,
        event_emitter=event_emitter,
    )
