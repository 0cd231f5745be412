"""Tests for spkrd.load_settings: environment, overrides and validation."""

import pytest
from pydantic import ValidationError

from spkrd.load_settings import Settings, load_settings

ENV_VARS = (
    "SPKRD_HOST",
    "SPKRD_PORT",
    "SPKRD_RETRY_TIMEOUT",
    "SPKRD_DEVICE",
    "SPKRD_DEBUG",
    "SPKRD_DAEMON",
    "SPKRD_PIDFILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings.port == 8080
        assert settings.retry_timeout == 30
        assert settings.device_path == "/dev/speaker"
        assert settings.debug is False
        assert settings.daemon is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SPKRD_PORT", "9090")
        monkeypatch.setenv("SPKRD_RETRY_TIMEOUT", "5")
        monkeypatch.setenv("SPKRD_DEVICE", "/tmp/speaker")
        monkeypatch.setenv("SPKRD_DEBUG", "yes")
        settings = load_settings()
        assert settings.port == 9090
        assert settings.retry_timeout == 5.0
        assert settings.device_path == "/tmp/speaker"
        assert settings.debug is True

    def test_overrides_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("SPKRD_PORT", "9090")
        settings = load_settings(port=7000, device_path=None)
        assert settings.port == 7000
        assert settings.device_path == "/dev/speaker"

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValueError):
            load_settings(port=port)

    def test_negative_timeout(self):
        with pytest.raises(ValueError):
            load_settings(retry_timeout=-1)

    def test_settings_are_immutable(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.retry_timeout = 1
