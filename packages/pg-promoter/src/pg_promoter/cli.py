"""Command-line entry point for pg-promoter.

Usage:
    pg-promoter run --config /etc/pg-promoter.yaml
    pg-promoter check --config /etc/pg-promoter.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pg_promoter import __version__
from pg_promoter.adapters.yaml_settings_source import YamlSettingsSource
from pg_promoter.domain.exceptions import (
    HostPidError,
    PromoterConfigError,
    StartupCheckError,
)
from pg_promoter.domain.settings import LOG_LEVELS
from pg_promoter.domain.state import ExitStatus
from pg_promoter.factories import create_connection_factory, create_host_pid_resolver
from pg_promoter.usecases.startup_checker import StartupChecker
from pg_promoter.worker import PromoterWorker

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg-promoter",
        description="Promote a PostgreSQL standby when its primary stops answering",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="override the log level from the configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("run", "run the failover loop until shutdown or promotion"),
        ("check", "validate the configuration and connectivity, then exit"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--config", "-c", type=Path, required=True, help="YAML configuration file"
        )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run_check(source: YamlSettingsSource) -> ExitStatus:
    """Validate configuration, primary connectivity and the host pid file."""
    try:
        settings = source.load()
    except PromoterConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ExitStatus.FAILURE
    print(f"Configuration OK: {source.config_path}")

    try:
        StartupChecker(create_connection_factory(settings)).verify(
            settings.primary_conninfo
        )
    except StartupCheckError as e:
        print(f"Primary unreachable: {e}", file=sys.stderr)
        return ExitStatus.FAILURE
    print("Primary reachable")

    try:
        host_pid = create_host_pid_resolver(settings).resolve()
    except HostPidError as e:
        print(f"Host process not found: {e}", file=sys.stderr)
        return ExitStatus.FAILURE
    print(f"Host process: {host_pid}")
    print(f"Trigger file: {settings.trigger_path}")
    print(
        f"Promotion after {settings.keepalive_count} failed heartbeat(s), "
        f"one every {settings.keepalive_time}s"
    )
    return ExitStatus.SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "INFO")

    source = YamlSettingsSource(args.config)
    if args.command == "check":
        return int(run_check(source))

    return int(PromoterWorker(source, log_level=args.log_level).run())


if __name__ == "__main__":
    sys.exit(main())
