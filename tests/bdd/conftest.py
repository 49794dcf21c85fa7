"""Shared fixtures for BDD tests."""

import pytest
from pathlib import Path


@pytest.fixture
def standby_data_dir(tmp_path: Path) -> Path:
    """Create a temporary standby data directory.

    Returns:
        Path to temporary directory simulating the PostgreSQL data directory.
    """
    pgdata = tmp_path / "pgdata"
    pgdata.mkdir()
    return pgdata
