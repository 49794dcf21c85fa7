"""Unit tests for the pg-promoter command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from pg_promoter import __version__, cli
from pg_promoter.adapters.fakes import FakeConnectionFactory
from pg_promoter.adapters.yaml_settings_source import YamlSettingsSource
from pg_promoter.domain.state import ExitStatus


@pytest.fixture
def config_file(tmp_path: Path, data_dir: Path) -> Path:
    path = tmp_path / "pg-promoter.yaml"
    path.write_text(
        "primary_conninfo: host=primary dbname=postgres\n"
        f"data_dir: {data_dir}\n"
        "keepalive_time: 2\n"
        "keepalive_count: 4\n"
    )
    return path


@pytest.fixture
def connections(monkeypatch: pytest.MonkeyPatch) -> FakeConnectionFactory:
    factory = FakeConnectionFactory()
    monkeypatch.setattr(cli, "create_connection_factory", lambda settings: factory)
    return factory


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.CLI")
class TestParser:
    """Tests for argument parsing."""

    def test_run_requires_config(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(["run"])
        assert exc_info.value.code == 2

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_log_level_is_case_insensitive(self) -> None:
        args = cli.build_parser().parse_args(["--log-level", "debug", "check", "-c", "x.yaml"])
        assert args.log_level == "DEBUG"
        assert args.config == Path("x.yaml")

    def test_unknown_log_level(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--log-level", "loud", "run", "-c", "x.yaml"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.CLI")
class TestCheckCommand:
    """Tests for `pg-promoter check`."""

    def test_check_succeeds(
        self,
        config_file: Path,
        data_dir: Path,
        connections: FakeConnectionFactory,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (data_dir / "postmaster.pid").write_text("4242\n")

        assert cli.main(["check", "--config", str(config_file)]) == 0

        out = capsys.readouterr().out
        assert "Configuration OK" in out
        assert "Primary reachable" in out
        assert "Host process: 4242" in out
        assert f"Trigger file: {data_dir / 'promote'}" in out
        assert "Promotion after 4 failed heartbeat(s), one every 2s" in out

    def test_check_invalid_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("data_dir: /pgdata\n")

        assert cli.main(["check", "-c", str(config)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_check_unreachable_primary(
        self,
        config_file: Path,
        connections: FakeConnectionFactory,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        connections.queue_heartbeats([False])

        assert cli.main(["check", "-c", str(config_file)]) == 1
        assert "Primary unreachable" in capsys.readouterr().err

    def test_check_missing_pid_file(
        self,
        config_file: Path,
        connections: FakeConnectionFactory,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert cli.main(["check", "-c", str(config_file)]) == 1
        assert "Host process not found" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.CLI")
class TestRunCommand:
    """Tests for `pg-promoter run`."""

    def test_run_delegates_to_worker(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        created: list[tuple[YamlSettingsSource, str | None]] = []

        class StubWorker:
            def __init__(self, source: YamlSettingsSource, log_level: str | None = None) -> None:
                created.append((source, log_level))

            def run(self) -> ExitStatus:
                return ExitStatus.FAILURE

        monkeypatch.setattr(cli, "PromoterWorker", StubWorker)

        assert cli.main(["--log-level", "warning", "run", "-c", str(config_file)]) == 1
        source, log_level = created[0]
        assert source.config_path == config_file
        assert log_level == "WARNING"
