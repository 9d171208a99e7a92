from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from click.testing import CliRunner

# Register fixture plugins from tests/fixtures/
pytest_plugins = [
    "tests.fixtures.runners",
]


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Logs go to stderr at WARNING level so they never mix with the
    stdout of CLI commands under test.
    """
    from toolwarden.logging import clear_context, configure_logging

    configure_logging(level=logging.WARNING)
    yield
    clear_context()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove TOOLWARDEN_ and key-override variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("TOOLWARDEN_") or key == "WIKI_APP_PRIVATE_KEY_PATH":
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and chdir into a fresh project dir.

    Keeps the developer's ~/.config/toolwarden and ./toolwarden.yaml out of
    configuration tests.
    """
    home = temp_dir / "home"
    project = temp_dir / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample toolwarden.yaml content for testing."""
    return """
go:
  version: "go1.24.1"
  install_prefix: "/opt"

mermaid:
  version: "11.0.0"
  system_libraries:
    - libnss3
    - libgbm1

credentials:
  env_var: "TEST_APP_KEY"
  secret_name: "test_app_key"

drift:
  enabled: false

verbosity: "info"
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner.

    Example:
        >>> def test_version(cli_runner):
        ...     from toolwarden.main import cli
        ...     result = cli_runner.invoke(cli, ["--version"])
        ...     assert result.exit_code == 0
    """
    from click.testing import CliRunner

    return CliRunner()
