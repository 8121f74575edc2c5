"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from clockify_youtrack_sync.config import Config
from clockify_youtrack_sync.utils import StorageManager
from clockify_youtrack_sync.youtrack import WorkItemType
from tests.fakes import FakeYouTrack


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with an empty environment."""
    return Config(temp_config_dir, environ={})


@pytest.fixture
def work_types() -> list[WorkItemType]:
    """Work item types configured in YouTrack."""
    return [
        WorkItemType(id="58-0", name="Development"),
        WorkItemType(id="58-1", name=" Review "),
    ]


@pytest.fixture
def fake_youtrack(work_types: list[WorkItemType]) -> FakeYouTrack:
    """Create an empty fake YouTrack."""
    return FakeYouTrack(work_types=work_types)
