"""
Shared pytest fixtures for spkrd tests.

A regular temporary file stands in for the speaker device: opening it
write-only and writing the melody leaves the melody as its content.
"""

import errno
import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from spkrd import speaker
from spkrd.load_settings import Settings
from spkrd.main import create_app


@pytest.fixture()
def device(tmp_path: Path) -> Path:
    path = tmp_path / "speaker"
    path.write_text("")
    return path


@pytest.fixture()
def settings(device: Path) -> Settings:
    return Settings(port=8080, retry_timeout=30, device_path=str(device))


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture()
def failing_close(monkeypatch, device: Path) -> Path:
    """Make close() of the device fd fail with EIO after really closing it."""
    real_open, real_close = os.open, os.close
    device_fds = set()

    def recording_open(path, flags, *args):
        fd = real_open(path, flags, *args)
        if str(path) == str(device):
            device_fds.add(fd)
        return fd

    def close(fd):
        real_close(fd)
        if fd in device_fds:
            device_fds.discard(fd)
            raise OSError(errno.EIO, "Input/output error")

    monkeypatch.setattr(speaker.os, "open", recording_open)
    monkeypatch.setattr(speaker.os, "close", close)
    return device
