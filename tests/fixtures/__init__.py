"""Shared test fixtures for the toolwarden test suite.

Runner Fakes (from tests/fixtures/runners.py)
----------------------------------------------

Classes:
    FakeCommandRunner: Scripted CommandExecutor. Results are queued per
        command prefix and every call is recorded.

Functions:
    ok, fail: Build successful / failing CommandResult instances.

Fixtures:
    fake_runner: A fresh FakeCommandRunner where every command succeeds.

Example:
    >>> def test_git_missing(fake_runner):
    ...     fake_runner.on(["git", "--version"], fail(returncode=127))
    ...     with pytest.raises(NotInstalledError):
    ...         GitClient(fake_runner).verify()
"""

from __future__ import annotations

from tests.fixtures.runners import FakeCommandRunner, fail, fake_runner, ok

__all__ = [
    "FakeCommandRunner",
    "fail",
    "fake_runner",
    "ok",
]
