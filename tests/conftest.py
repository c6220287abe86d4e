"""
Shared pytest fixtures for Server-Backup tests.

Provides fake sources/destinations, temporary config files and subprocess
mocks so no test ever runs duplicity or mysqldump.
"""

import json
import tempfile
from typing import Dict, List, Optional
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from server_backup.cores.workspace_registry import WorkspaceRegistry
from server_backup.destinations.base import Destination
from server_backup.sources.base import Source
from server_backup.types import BackupPlan


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external binaries")


class FakeSource(Source):
    """Source that records its lifecycle calls."""

    def __init__(
        self,
        name: str = "fake",
        options: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
        pre_error: Optional[Exception] = None,
        post_error: Optional[Exception] = None,
    ):
        self.name = name
        self.options = options or []
        self.env = env or {}
        self.pre_error = pre_error
        self.post_error = post_error
        self.pre_calls = 0
        self.post_calls = 0

    def pretty_name(self) -> str:
        return self.name

    def destination_path_segment(self) -> str:
        return self.name

    def transport_url(self) -> str:
        return f"/srv/{self.name}"

    def transport_options(self) -> List[str]:
        return list(self.options)

    def transport_env(self) -> Dict[str, str]:
        return dict(self.env)

    def pre(self, context) -> None:
        self.pre_calls += 1
        if self.pre_error:
            raise self.pre_error

    def post(self) -> None:
        self.post_calls += 1
        if self.post_error:
            raise self.post_error


class FakeDestination(Destination):

    def __init__(self, name: str = "dest", options=None, env=None):
        self.name = name
        self.options = options or []
        self.env = env or {}

    def pretty_name(self) -> str:
        return self.name

    def transport_url(self, server_name: str) -> str:
        return f"fake://{self.name}/{server_name.lower()}"

    def transport_options(self) -> List[str]:
        return list(self.options)

    def transport_env(self) -> Dict[str, str]:
        return dict(self.env)


@pytest.fixture(autouse=True)
def reset_registry():
    """Fresh WorkspaceRegistry for every test."""
    WorkspaceRegistry.reset_instance()
    yield
    WorkspaceRegistry.reset_instance()


@pytest.fixture
def cli_runner():
    """Typer CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def tmp_workspace_root(tmp_path, monkeypatch):
    """Make tempfile.mkdtemp() create workspaces below tmp_path."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def plan():
    """Plan with one source and one destination."""
    return BackupPlan(
        server_name="WEB1",
        sources=[FakeSource("src")],
        destinations=[FakeDestination("dest")],
        passphrase="test-passphrase",
    )


@pytest.fixture
def config_data():
    return {
        "server_name": "WEB1",
        "passphrase": "test-passphrase",
        "database": {"user": "backup", "password": "db-secret"},
        "sources": [
            {"type": "dir", "path": "/data/app"},
        ],
        "destinations": [
            {
                "type": "s3",
                "bucket": "b",
                "access_key_id": "AKIDTEST",
                "secret_access_key": "s3-secret",
            },
        ],
    }


@pytest.fixture
def tmp_config(tmp_path, config_data):
    """Write config_data to a temporary config file."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config_data, indent=2))
    return config_file


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for external commands."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=0, stdout="", stderr=b"")
        yield mock_run
