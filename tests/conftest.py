"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from tests.helpers import FAKE_PAYLOAD, FAKE_URL, sha256_tag
from vmdeps.adapters.mock import MockFetcher
from vmdeps.core.models.dependency import BinaryDependency


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return an empty vmdeps home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def settings_file(home: Path) -> Path:
    """Path of settings.yaml inside the temp home (not created)."""
    return home / "settings.yaml"


@pytest.fixture
def config_json(home: Path) -> Path:
    """Path of config.json inside the temp home (not created)."""
    return home / "config.json"


@pytest.fixture
def fetcher() -> MockFetcher:
    """Mock fetcher serving FAKE_PAYLOAD at FAKE_URL."""
    mock = MockFetcher()
    mock.set_payload(FAKE_URL, FAKE_PAYLOAD)
    return mock


@pytest.fixture
def fake_dep(home: Path) -> BinaryDependency:
    """A dependency whose hash matches FAKE_PAYLOAD."""
    return BinaryDependency(
        binary_name="docker-credential-fake",
        source_url=FAKE_URL,
        expected_hash=sha256_tag(FAKE_PAYLOAD),
        install_dir=home / "cred-helpers",
        owner_dir=home,
    )


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
