"""Pytest configuration and shared fixtures for KeyCat tests."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from keycat.catalog import CATALOG, KeyTypeCatalog
from keycat.cli import cli


class KeyCatWorkspace:
    """A helper class to manage a test configuration directory for KeyCat."""

    def __init__(self, tmp_path: Path, runner: CliRunner):
        self.root = tmp_path
        self.runner = runner
        self.config_dir = self.root / "config"
        self.config_file = self.config_dir / "keycat.yaml"

    def run(self, args, env=None):
        """Invoke the KeyCat CLI with the workspace config directory."""
        base_args = ["--config", str(self.config_dir)] + args
        return self.runner.invoke(cli, base_args, env=env)

    def write_config(self, config_data):
        """Write the keycat.yaml configuration file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            yaml.safe_dump(config_data, f)

    def read_config(self):
        """Read the keycat.yaml configuration file."""
        with open(self.config_file) as f:
            return yaml.safe_load(f)


@pytest.fixture(autouse=True)
def reset_catalog():
    """Keep size selections on the shared catalogue from leaking between tests."""
    CATALOG.reset_all()
    yield
    CATALOG.reset_all()


@pytest.fixture
def catalog() -> KeyTypeCatalog:
    """Provides a private catalogue instance."""
    return KeyTypeCatalog()


@pytest.fixture
def runner() -> CliRunner:
    """Provides a Click CliRunner instance."""
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, runner: CliRunner) -> KeyCatWorkspace:
    """Provides an empty KeyCat configuration workspace in a temporary directory."""
    return KeyCatWorkspace(tmp_path, runner)
