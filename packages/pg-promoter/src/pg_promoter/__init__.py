"""pg-promoter: Automatic promotion of a PostgreSQL standby on primary failure."""

__version__ = "0.1.0"

from pg_promoter.domain.settings import PromoterSettings
from pg_promoter.domain.exceptions import PromoterError, PromoterConfigError
from pg_promoter.domain.state import ExitStatus
from pg_promoter.usecases.heartbeat_monitor import HeartbeatMonitor
from pg_promoter.usecases.failover_controller import FailoverController
from pg_promoter.usecases.promoter import Promoter

__all__ = [
    "PromoterSettings",
    "PromoterError",
    "PromoterConfigError",
    "ExitStatus",
    "HeartbeatMonitor",
    "FailoverController",
    "Promoter",
]
