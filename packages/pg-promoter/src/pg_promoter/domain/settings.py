"""pg-promoter settings domain entity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from pg_promoter.domain.exceptions import PromoterConfigError

DEFAULT_KEEPALIVE_TIME = 5
DEFAULT_KEEPALIVE_COUNT = 3
DEFAULT_TRIGGER_FILE = "promote"
DEFAULT_CONNECT_TIMEOUT = 5
DEFAULT_PID_FILE = "postmaster.pid"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class PromoterSettings:
    """Configuration snapshot for the promoter worker.

    Immutable value object. A reload produces a new snapshot which the
    controller swaps in between loop iterations (see with_reloaded()).

    Attributes:
        primary_conninfo: libpq connection string for the primary server.
        data_dir: Absolute path of the standby's data directory.
        keepalive_time: Seconds to wait between heartbeats. Must be >= 1.
        keepalive_count: Consecutive heartbeat failures that trigger promotion.
                        Must be >= 1.
        trigger_file: Name of the promotion trigger file inside data_dir.
        connect_timeout: Connection and query timeout for a single heartbeat, in seconds.
        pid_file: Name of the host pid file inside data_dir.
        metrics_port: Port for the Prometheus exporter, or None to disable it.
        log_level: Logging level name.
    """

    primary_conninfo: str
    data_dir: str
    keepalive_time: int = DEFAULT_KEEPALIVE_TIME
    keepalive_count: int = DEFAULT_KEEPALIVE_COUNT
    trigger_file: str = DEFAULT_TRIGGER_FILE
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    pid_file: str = DEFAULT_PID_FILE
    metrics_port: int | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate_conninfo()
        self._validate_data_dir()
        self._validate_positive_int("keepalive_time", self.keepalive_time)
        self._validate_positive_int("keepalive_count", self.keepalive_count)
        self._validate_positive_int("connect_timeout", self.connect_timeout)
        self._validate_file_name("trigger_file", self.trigger_file)
        self._validate_file_name("pid_file", self.pid_file)
        self._validate_metrics_port()
        self._validate_log_level()

    @property
    def trigger_path(self) -> Path:
        """Return the full path of the promotion trigger file."""
        return Path(self.data_dir) / self.trigger_file

    @property
    def pid_file_path(self) -> Path:
        """Return the full path of the host pid file."""
        return Path(self.data_dir) / self.pid_file

    def with_reloaded(self, reloaded: PromoterSettings) -> PromoterSettings:
        """Return a copy that takes the reloadable values from *reloaded*.

        Only keepalive_time and keepalive_count change on reload. The
        connection string, data directory and trigger file are fixed for the
        lifetime of the process.

        Args:
            reloaded: Freshly loaded settings.

        Returns:
            New PromoterSettings snapshot.
        """
        return replace(
            self,
            keepalive_time=reloaded.keepalive_time,
            keepalive_count=reloaded.keepalive_count,
        )

    def _validate_conninfo(self) -> None:
        if not isinstance(self.primary_conninfo, str):
            raise PromoterConfigError(
                f"primary_conninfo must be a string, got: {self.primary_conninfo!r}"
            )
        if not self.primary_conninfo.strip():
            raise PromoterConfigError(
                "primary_conninfo cannot be empty or whitespace-only"
            )

    def _validate_data_dir(self) -> None:
        """Validate that data_dir is absolute and doesn't contain traversal."""
        if not isinstance(self.data_dir, str) or not self.data_dir:
            raise PromoterConfigError("data_dir cannot be empty")

        # Check for null bytes first (security issue)
        if "\x00" in self.data_dir:
            raise PromoterConfigError(
                f"data_dir contains null byte, got: {self.data_dir!r}"
            )
        path = Path(self.data_dir)
        if ".." in path.parts:
            raise PromoterConfigError(
                f"data_dir contains path traversal, got: {self.data_dir}"
            )
        if not path.is_absolute():
            raise PromoterConfigError(
                f"data_dir must be an absolute path, got: {self.data_dir}"
            )

    @staticmethod
    def _validate_positive_int(name: str, value: object) -> None:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise PromoterConfigError(f"{name} must be an integer, got: {value!r}")
        if value < 1:
            raise PromoterConfigError(f"{name} must be >= 1, got: {value}")

    @staticmethod
    def _validate_file_name(name: str, value: object) -> None:
        """Validate that value is a bare file name inside data_dir."""
        if not isinstance(value, str) or not value.strip():
            raise PromoterConfigError(
                f"{name} cannot be empty or whitespace-only"
            )
        if "\x00" in value:
            raise PromoterConfigError(f"{name} contains null byte, got: {value!r}")
        if "/" in value or "\\" in value or value in (".", ".."):
            raise PromoterConfigError(
                f"{name} must be a file name without directories, got: {value}"
            )

    def _validate_metrics_port(self) -> None:
        if self.metrics_port is None:
            return
        if isinstance(self.metrics_port, bool) or not isinstance(
            self.metrics_port, int
        ):
            raise PromoterConfigError(
                f"metrics_port must be an integer, got: {self.metrics_port!r}"
            )
        if not 1 <= self.metrics_port <= 65535:
            raise PromoterConfigError(
                f"metrics_port must be between 1 and 65535, got: {self.metrics_port}"
            )

    def _validate_log_level(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise PromoterConfigError(
                f"log_level must be one of {LOG_LEVELS}, got: {self.log_level!r}"
            )
