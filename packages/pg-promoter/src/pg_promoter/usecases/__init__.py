"""Use cases: Application logic layer."""

from pg_promoter.usecases.config_parser import ConfigParser
from pg_promoter.usecases.heartbeat_monitor import HeartbeatMonitor, LIVENESS_QUERY
from pg_promoter.usecases.startup_checker import StartupChecker
from pg_promoter.usecases.promoter import Promoter
from pg_promoter.usecases.failover_controller import FailoverController

__all__ = [
    "ConfigParser",
    "HeartbeatMonitor",
    "LIVENESS_QUERY",
    "StartupChecker",
    "Promoter",
    "FailoverController",
]
