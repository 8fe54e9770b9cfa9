"""Integration tests for the application entry point."""

import json
from datetime import datetime

import pytest

from antenna.services.dashboard import DashboardAssembler
from helpers import message_line, ms, write_transcript


@pytest.fixture
def populated_store(openclaw_dir, sessions_dir):
    now = datetime.now()
    write_transcript(sessions_dir, "abc123", [message_line(ms(now), 0.5)], mtime=now)
    return openclaw_dir


class TestAppImports:
    def test_app_module_importable(self):
        from antenna import app
        assert hasattr(app, "run")

    def test_main_module_importable(self):
        from antenna import __main__
        assert callable(__main__.main)


class TestRunOnce:
    def test_prints_snapshot(self, populated_store, capsys):
        from antenna.app import run_once

        assert run_once(DashboardAssembler(populated_store)) == 0
        out = capsys.readouterr().out.strip().splitlines()
        assert len(out) == 1
        payload = json.loads(out[0])
        assert payload["dashboard"]["totalCount"] == 1
        assert payload["dashboard"]["sessions"][0]["sessionId"] == "abc123"
        assert len(payload["activity"]) == 24

    def test_unreachable_store_exit_code(self, tmp_path, capsys):
        from antenna.app import EXIT_STORE_UNAVAILABLE, run_once

        assert run_once(DashboardAssembler(tmp_path / "missing")) == EXIT_STORE_UNAVAILABLE
        assert "unavailable" in capsys.readouterr().err

    def test_run_with_args(self, qapp, populated_store, capsys, monkeypatch):
        from antenna.app import run

        monkeypatch.delenv("OPENCLAW_DIR", raising=False)
        assert run(["--once", "--dir", str(populated_store)]) == 0
        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["dashboard"]["totalCost"] == 0.5
