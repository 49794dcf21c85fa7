"""Unit tests for Promoter use case."""

from __future__ import annotations

import os
import signal
from pathlib import Path

import pytest

from pg_promoter.adapters.fakes import FakeSignalSender
from pg_promoter.domain.exceptions import PromotionAlreadyAttemptedError
from pg_promoter.domain.heartbeat import PromotionOutcome
from pg_promoter.usecases.promoter import Promoter


@pytest.mark.unit
@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.Promoter")
class TestPromoter:
    """Tests for the two-phase promotion."""

    def test_writes_trigger_file_then_signals_host(self, data_dir: Path) -> None:
        sender = FakeSignalSender()
        promoter = Promoter(signal_sender=sender)

        result = promoter.promote(data_dir, "promote", host_pid=4242)

        assert result.outcome is PromotionOutcome.PROMOTED
        assert result.succeeded
        assert result.trigger_path == data_dir / "promote"
        assert (data_dir / "promote").is_file()
        assert sender.sent == [(4242, signal.SIGUSR1)]

    def test_trigger_file_is_empty(self, data_dir: Path) -> None:
        Promoter(signal_sender=FakeSignalSender()).promote(data_dir, "promote", 1)
        assert (data_dir / "promote").read_bytes() == b""

    def test_truncates_existing_trigger_file(self, data_dir: Path) -> None:
        (data_dir / "promote").write_text("stale")

        Promoter(signal_sender=FakeSignalSender()).promote(str(data_dir), "promote", 1)

        assert (data_dir / "promote").read_text() == ""

    def test_custom_promote_signal(self, data_dir: Path) -> None:
        sender = FakeSignalSender()
        Promoter(signal_sender=sender, promote_signal=signal.SIGUSR2).promote(
            data_dir, "promote", 7
        )
        assert sender.sent == [(7, signal.SIGUSR2)]

    def test_missing_data_dir_fails_without_signal(self, tmp_path: Path) -> None:
        sender = FakeSignalSender()

        result = Promoter(signal_sender=sender).promote(
            tmp_path / "missing", "promote", 4242
        )

        assert result.outcome is PromotionOutcome.ARTIFACT_FAILED
        assert not result.artifact_written
        assert "could not create or close trigger file" in (result.error or "")
        assert sender.sent == []

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    def test_read_only_data_dir_fails_without_signal(self, data_dir: Path) -> None:
        sender = FakeSignalSender()
        data_dir.chmod(0o500)
        try:
            result = Promoter(signal_sender=sender).promote(data_dir, "promote", 4242)
        finally:
            data_dir.chmod(0o700)

        assert result.outcome is PromotionOutcome.ARTIFACT_FAILED
        assert not (data_dir / "promote").exists()
        assert sender.sent == []

    def test_signal_failure_leaves_trigger_file(self, data_dir: Path) -> None:
        sender = FakeSignalSender()
        sender.set_error(ProcessLookupError(3, "No such process"))

        result = Promoter(signal_sender=sender).promote(data_dir, "promote", 4242)

        assert result.outcome is PromotionOutcome.SIGNAL_FAILED
        assert result.artifact_written
        assert (data_dir / "promote").exists()
        assert "failed to send SIGUSR1 to host process 4242" in (result.error or "")

    def test_second_attempt_is_refused(self, data_dir: Path) -> None:
        sender = FakeSignalSender()
        promoter = Promoter(signal_sender=sender)
        promoter.promote(data_dir, "promote", 4242)

        with pytest.raises(PromotionAlreadyAttemptedError):
            promoter.promote(data_dir, "promote", 4242)

        assert len(sender.sent) == 1

    def test_failed_attempt_still_counts(self, tmp_path: Path) -> None:
        promoter = Promoter(signal_sender=FakeSignalSender())
        promoter.promote(tmp_path / "missing", "promote", 1)

        assert promoter.attempted
        with pytest.raises(PromotionAlreadyAttemptedError):
            promoter.promote(tmp_path, "promote", 1)

    def test_not_attempted_initially(self) -> None:
        assert Promoter(signal_sender=FakeSignalSender()).attempted is False
