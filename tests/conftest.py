"""Shared test fixtures for Antenna."""

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need Qt."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv[:1] or ["test"])
    yield app


@pytest.fixture
def now() -> datetime:
    """Fixed 'now' for deterministic tests: Saturday Feb 14, 2026 at noon."""
    return datetime(2026, 2, 14, 12, 0, 0)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def malformed_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_session.jsonl"


@pytest.fixture
def openclaw_dir(tmp_path) -> Path:
    """Create an empty OpenClaw root with its sessions directory."""
    root = tmp_path / ".openclaw"
    (root / "agents" / "main" / "sessions").mkdir(parents=True)
    (root / "cron").mkdir()
    return root


@pytest.fixture
def sessions_dir(openclaw_dir) -> Path:
    return openclaw_dir / "agents" / "main" / "sessions"
