"""Domain exceptions.

Exception hierarchy:
- PromoterError: Base for every error raised by pg-promoter.
  - PromoterConfigError: Invalid configuration (settings, YAML file).
  - PrimaryUnavailableError: A heartbeat could not reach the primary.
    - PrimaryConnectionError: Connection could not be established.
    - PrimaryQueryError: Connected, but the liveness query failed.
  - StartupCheckError: Initial connectivity confirmation failed.
  - HostPidError: The host (postmaster) pid could not be resolved.
  - PromotionError: The promotion action failed.
    - TriggerFileError: Trigger file could not be created or closed.
    - PromotionSignalError: Trigger file exists, but the host was not signalled.
    - PromotionAlreadyAttemptedError: Promotion was already attempted.
"""

from __future__ import annotations

from pathlib import Path


class PromoterError(Exception):
    """Base exception for pg-promoter."""

    pass


class PromoterConfigError(PromoterError):
    """Raised when pg-promoter configuration is invalid.

    Raised by domain entities (e.g., PromoterSettings) and use cases
    (e.g., ConfigParser) when configuration validation fails.
    """

    pass


class PrimaryUnavailableError(PromoterError):
    """Raised by connection adapters when the primary cannot be checked.

    HeartbeatMonitor catches this family and converts it into a failed
    heartbeat. It never escapes the heartbeat boundary.
    """

    pass


class PrimaryConnectionError(PrimaryUnavailableError):
    """Raised when a connection to the primary cannot be established."""

    pass


class PrimaryQueryError(PrimaryUnavailableError):
    """Raised when the liveness query fails on an open connection."""

    pass


class StartupCheckError(PromoterError):
    """Raised when the primary is unreachable at worker startup.

    Attributes:
        conninfo: The connection string that was tried.
    """

    def __init__(self, message: str, conninfo: str) -> None:
        super().__init__(message)
        self.conninfo = conninfo


class HostPidError(PromoterError):
    """Raised when the host process id cannot be read from its pid file.

    Attributes:
        pid_file: Path of the pid file that was read.
    """

    def __init__(self, message: str, pid_file: Path) -> None:
        super().__init__(message)
        self.pid_file = pid_file


class PromotionError(PromoterError):
    """Base exception for promotion failures.

    Attributes:
        message: Human-readable error description.
        trigger_path: Location of the trigger file.
        original_error: The underlying exception that caused the failure (optional).
    """

    def __init__(
        self,
        message: str,
        trigger_path: Path,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize PromotionError.

        Args:
            message: Human-readable error description.
            trigger_path: Location of the trigger file.
            original_error: The underlying exception that caused the failure.
        """
        super().__init__(message)
        self.message = message
        self.trigger_path = trigger_path
        self.original_error = original_error


class TriggerFileError(PromotionError):
    """Raised when the trigger file cannot be created or closed.

    No promotion signal has been sent when this is raised.
    """

    pass


class PromotionSignalError(PromotionError):
    """Raised when the host process could not be signalled.

    The trigger file already exists on disk when this is raised.

    Attributes:
        host_pid: Process id that could not be signalled.
    """

    def __init__(
        self,
        message: str,
        trigger_path: Path,
        host_pid: int,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, trigger_path, original_error)
        self.host_pid = host_pid


class PromotionAlreadyAttemptedError(PromotionError):
    """Raised when promote() is called a second time on the same Promoter."""

    pass
