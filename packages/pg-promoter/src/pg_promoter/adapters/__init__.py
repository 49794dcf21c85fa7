"""Interface adapters: ports plus OS, filesystem and configuration adapters.

Adapters with optional or native dependencies (psycopg, prometheus-client)
are imported from their own modules.
"""

from pg_promoter.adapters.ports import (
    ConnectionHandle,
    ConnectionFactoryPort,
    LatchPort,
    HostPidResolverPort,
    SignalSenderPort,
    SettingsSourcePort,
    EventEmitterPort,
    OsSignalSender,
)
from pg_promoter.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from pg_promoter.adapters.pid_file import PostmasterPidFile, is_process_alive
from pg_promoter.adapters.latch import ProcessLatch
from pg_promoter.adapters.signal_handlers import (
    install_signal_handlers,
    restore_signal_handlers,
)

__all__ = [
    "ConnectionHandle",
    "ConnectionFactoryPort",
    "LatchPort",
    "HostPidResolverPort",
    "SignalSenderPort",
    "SettingsSourcePort",
    "EventEmitterPort",
    "OsSignalSender",
    "MetricsPort",
    "NoOpMetricsAdapter",
    "PostmasterPidFile",
    "is_process_alive",
    "ProcessLatch",
    "install_signal_handlers",
    "restore_signal_handlers",
]
