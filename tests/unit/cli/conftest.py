"""Shared fixtures for CLI command tests.

This module provides shared fixtures and utilities for testing CLI commands.
The fixtures are scoped to the tests/unit/cli/ directory.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner (from tests/conftest.py)
- clean_env: Clean environment without TOOLWARDEN_ vars (from tests/conftest.py)
- isolated_home: Empty HOME and project directory (from tests/conftest.py)
- fake_runner: Scripted command executor (from tests/fixtures/runners.py)
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from tests.fixtures.runners import FakeCommandRunner

PROJECT_CONFIG = """
go:
  version: "1.25.3"

mermaid:
  version: "10.9.0"
  system_libraries:
    - libnss3
    - libgbm1

drift:
  enabled: false
"""

Invoke = Callable[..., Result]


@pytest.fixture
def project(clean_env: None, isolated_home: Path) -> Path:
    """Project directory with a toolwarden.yaml that never touches the network."""
    (isolated_home / "toolwarden.yaml").write_text(PROJECT_CONFIG)
    return isolated_home


@pytest.fixture
def invoke(cli_runner: CliRunner, project: Path, fake_runner: FakeCommandRunner) -> Invoke:
    """Invoke the CLI with the fake executor injected.

    Example:
        >>> def test_verify(invoke, fake_runner):
        ...     result = invoke("git", "verify")
        ...     assert result.exit_code == 0
    """
    from toolwarden.main import cli

    def _invoke(*args: str, executor: FakeCommandRunner | None = None) -> Result:
        runner = executor if executor is not None else fake_runner
        return cli_runner.invoke(cli, list(args), obj={"executor": runner})

    return _invoke
