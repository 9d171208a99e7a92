"""Tests for the GitHub App key resource."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures.runners import FakeCommandRunner, ok
from toolwarden.credentials import (
    AppKeyResource,
    CredentialResolver,
    ProvisionOutcome,
    SecretProvisioner,
)
from toolwarden.exceptions import CredentialNotFoundError
from toolwarden.resources import SelfHealingResource


def _resource(tmp_path: Path, runner: FakeCommandRunner) -> AppKeyResource:
    resolver = CredentialResolver(
        env_var="WIKI_APP_PRIVATE_KEY_PATH",
        mount_path=tmp_path / "mount" / "key",
        search_dir=tmp_path,
        pattern="*.pem",
        environ={},
    )
    return AppKeyResource(resolver, SecretProvisioner(runner, "wiki_diagram_app_key"))


class TestAppKeyResource:
    def test_is_a_self_healing_resource(
        self, tmp_path: Path, fake_runner: FakeCommandRunner
    ) -> None:
        assert isinstance(_resource(tmp_path, fake_runner), SelfHealingResource)

    def test_verify_never_touches_docker(
        self, tmp_path: Path, fake_runner: FakeCommandRunner
    ) -> None:
        (tmp_path / "app.pem").write_text("key")

        _resource(tmp_path, fake_runner).verify()

        assert fake_runner.calls == []

    def test_ensure_provisions_on_manager(
        self, tmp_path: Path, fake_runner: FakeCommandRunner
    ) -> None:
        (tmp_path / "app.pem").write_text("key")
        fake_runner.on(["docker", "info"], ok("true"))

        outcome = _resource(tmp_path, fake_runner).ensure()

        assert outcome is ProvisionOutcome.CREATED
        assert fake_runner.ran("docker", "secret", "create")

    def test_ensure_off_swarm_is_a_no_op(
        self, tmp_path: Path, fake_runner: FakeCommandRunner
    ) -> None:
        (tmp_path / "app.pem").write_text("key")
        fake_runner.on(["docker", "info"], ok("false"))

        assert _resource(tmp_path, fake_runner).ensure() is ProvisionOutcome.SKIPPED_NOT_MANAGER

    def test_missing_key_propagates_unchanged(
        self, tmp_path: Path, fake_runner: FakeCommandRunner
    ) -> None:
        with pytest.raises(CredentialNotFoundError):
            _resource(tmp_path, fake_runner).ensure()

        assert fake_runner.calls == []
