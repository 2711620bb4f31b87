"""
Pytest configuration and fixtures for messagr tests.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fakes import FakeRemoteClient

from messagr.config import Config, clear_config_cache


@pytest.fixture
def remote() -> FakeRemoteClient:
    """Provide a fresh fake remote endpoint."""
    return FakeRemoteClient()


@pytest.fixture
def config() -> Config:
    """Provide a default configuration without touching disk."""
    return Config()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_messagr_home(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Provide an isolated ~/.messagr directory and a clean environment."""
    messagr_home = temp_dir / ".messagr"
    messagr_home.mkdir()
    monkeypatch.setenv("MESSAGR_HOME", str(messagr_home))
    for key in list(os.environ):
        if key.startswith("MESSAGR_") and key != "MESSAGR_HOME":
            monkeypatch.delenv(key)
    monkeypatch.chdir(temp_dir)
    clear_config_cache()

    yield messagr_home

    clear_config_cache()
