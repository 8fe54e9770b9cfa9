"""Tests for antenna.services.config_manager."""

from pathlib import Path

import pytest

from antenna.services.config_manager import ConfigManager


@pytest.fixture
def config(qapp, tmp_path, monkeypatch):
    """Create a ConfigManager with isolated QSettings."""
    from PySide6.QtCore import QSettings
    monkeypatch.delenv("OPENCLAW_DIR", raising=False)
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "config"))
    return ConfigManager()


# ---------------------------------------------------------------------------
# 1. Defaults
# ---------------------------------------------------------------------------

def test_defaults(config):
    """Unset keys return values from the DEFAULTS table."""
    assert config.get_string("general/openclawDir") == "~/.openclaw"
    assert config.get_int("monitor/pollInterval") == 5000
    assert config.get_int("monitor/activeWindowMinutes") == 30
    assert config.get_int("monitor/maxWorkers") == 4
    assert config.get_bool("advanced/debugLogging") is False


# ---------------------------------------------------------------------------
# 2. Set and get
# ---------------------------------------------------------------------------

def test_set_get_string(config):
    config.set_string("general/openclawDir", "/srv/openclaw")
    assert config.get_string("general/openclawDir") == "/srv/openclaw"


def test_set_get_int(config):
    config.set_int("monitor/pollInterval", 1000)
    assert config.get_int("monitor/pollInterval") == 1000


def test_set_get_bool(config):
    config.set_bool("advanced/debugLogging", True)
    assert config.get_bool("advanced/debugLogging") is True


def test_bad_int_falls_back_to_default(config):
    config.set_string("monitor/maxWorkers", "many")
    assert config.get_int("monitor/maxWorkers") == 4


# ---------------------------------------------------------------------------
# 3. Settings changed signal
# ---------------------------------------------------------------------------

def test_settings_changed_signal(config):
    """settings_changed emits the key that was changed."""
    keys = []
    config.settings_changed.connect(lambda k: keys.append(k))
    config.set_int("monitor/pollInterval", 2000)
    assert keys == ["monitor/pollInterval"]


# ---------------------------------------------------------------------------
# 4. Resolved values
# ---------------------------------------------------------------------------

def test_openclaw_dir_expands_user(config):
    assert config.openclaw_dir() == Path.home() / ".openclaw"


def test_openclaw_dir_env_override(config, monkeypatch, tmp_path):
    config.set_string("general/openclawDir", "/srv/openclaw")
    monkeypatch.setenv("OPENCLAW_DIR", str(tmp_path))
    assert config.openclaw_dir() == tmp_path


def test_pass_deadline(config):
    assert config.pass_deadline() == 30.0
    config.set_int("monitor/passDeadline", 0)
    assert config.pass_deadline() is None
