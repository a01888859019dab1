"""Shared fixtures. ffmpeg is replaced by a fake so the suite runs without it."""
import subprocess
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.conversion.service import AudioConversionService, get_conversion_service
from app.main import app


class FakeFfmpeg:
    """Stands in for subprocess.run: records argv and writes the output file."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.returncode = 0
        self.stderr = ""
        self.output = b"ID3\x03\x00fake-mp3-frames"
        self.staged_input = None
        self.write_output = True
        self.run_kwargs = {}

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.run_kwargs = kwargs
        self.staged_input = Path(cmd[cmd.index("-i") + 1]).read_bytes()
        if self.returncode == 0 and self.write_output:
            Path(cmd[-1]).write_bytes(self.output)
        return subprocess.CompletedProcess(cmd, self.returncode, stdout="", stderr=self.stderr)


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    fake = FakeFfmpeg()
    monkeypatch.setattr("app.conversion.service.subprocess.run", fake)
    return fake


@pytest.fixture
def temp_dir(tmp_path):
    d = tmp_path / "staging"
    d.mkdir()
    return d


@pytest.fixture
def service(temp_dir):
    return AudioConversionService(ffmpeg_path="ffmpeg", temp_dir=temp_dir)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_conversion_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
