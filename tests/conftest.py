"""Shared test fixtures for the Claude status line."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that touch QSettings."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def basic_snapshot_json(fixtures_dir) -> str:
    return (fixtures_dir / "basic_snapshot.json").read_text()


@pytest.fixture
def full_snapshot_json(fixtures_dir) -> str:
    return (fixtures_dir / "full_snapshot.json").read_text()


@pytest.fixture
def price_table_snapshot_json(fixtures_dir) -> str:
    return (fixtures_dir / "price_table_snapshot.json").read_text()


@pytest.fixture
def now() -> datetime:
    """Fixed wall clock shared by timing tests."""
    return datetime(2025, 3, 14, 9, 31, 1, tzinfo=timezone.utc)
