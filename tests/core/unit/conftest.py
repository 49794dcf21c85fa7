"""Pytest configuration and shared fixtures for pg-promoter unit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pg_promoter.domain.settings import PromoterSettings


def pytest_configure(config: Any) -> None:
    """Register custom markers for unit tests."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Create a temporary standby data directory."""
    path = tmp_path / "pgdata"
    path.mkdir()
    return path


@pytest.fixture
def make_settings(data_dir: Path) -> Callable[..., PromoterSettings]:
    """Build PromoterSettings rooted at the temporary data directory.

    Keyword arguments override the defaults.
    """

    def _make(**overrides: Any) -> PromoterSettings:
        values: dict[str, Any] = {
            "primary_conninfo": "host=primary port=5432 dbname=postgres",
            "data_dir": str(data_dir),
        }
        values.update(overrides)
        return PromoterSettings(**values)

    return _make
