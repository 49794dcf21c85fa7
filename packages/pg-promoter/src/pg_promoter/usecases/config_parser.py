"""Config parser use case for pg-promoter."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import yaml

from pg_promoter.domain.exceptions import PromoterConfigError
from pg_promoter.domain.settings import PromoterSettings

_KNOWN_KEYS = frozenset(
    {
        "primary_conninfo",
        "data_dir",
        "keepalive_time",
        "keepalive_count",
        "trigger_file",
        "connect_timeout",
        "pid_file",
        "metrics_port",
        "log_level",
    }
)


class ConfigParser:
    """Parses pg-promoter YAML configuration to settings.

    A missing data_dir falls back to the PGDATA environment variable, the
    same place the database server looks for its data directory.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize the parser.

        Args:
            environ: Environment used for fallbacks. Defaults to os.environ.
        """
        self._environ = environ if environ is not None else os.environ

    def parse(self, yaml_str: str) -> PromoterSettings:
        """Parse pg-promoter YAML config to settings.

        Args:
            yaml_str: YAML string representing the configuration.

        Returns:
            PromoterSettings domain object.

        Raises:
            PromoterConfigError: If YAML is invalid, required fields are
                missing, or any value fails validation.
        """
        try:
            config = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise PromoterConfigError(f"Invalid YAML: {e}") from e

        if not isinstance(config, dict):
            raise PromoterConfigError("Config must be a dictionary")

        unknown = sorted(str(key) for key in config if key not in _KNOWN_KEYS)
        if unknown:
            raise PromoterConfigError(f"Unknown config keys: {', '.join(unknown)}")

        if "primary_conninfo" not in config:
            raise PromoterConfigError("Missing required field in config: primary_conninfo")

        values: dict[str, Any] = dict(config)
        if values.get("data_dir") is None:
            pgdata = self._environ.get("PGDATA")
            if not pgdata:
                raise PromoterConfigError(
                    "data_dir is not set in config and PGDATA is not set"
                )
            values["data_dir"] = pgdata

        if isinstance(values.get("log_level"), str):
            values["log_level"] = values["log_level"].upper()

        return PromoterSettings(**values)
