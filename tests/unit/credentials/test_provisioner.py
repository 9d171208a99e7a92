"""Tests for publishing the key file as a Docker Swarm secret."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures.runners import FakeCommandRunner, fail, ok
from toolwarden.credentials import (
    CredentialSource,
    ProvisionOutcome,
    SecretArtifact,
    SecretProvisioner,
)
from toolwarden.exceptions import ProvisionError

SECRET = "wiki_diagram_app_key"
LOCAL_KEY = SecretArtifact(Path("/home/dev/key.pem"), CredentialSource.LOCAL_FILE_GLOB)
SWARM_PROBE = ["docker", "info", "--format", "{{.Swarm.ControlAvailable}}"]


@pytest.fixture
def manager(fake_runner: FakeCommandRunner) -> FakeCommandRunner:
    """Runner on a host that controls a swarm."""
    return fake_runner.on(SWARM_PROBE, ok("true\n"))


class TestSecretProvisioner:
    def test_mounted_secret_needs_no_probe(self, fake_runner: FakeCommandRunner) -> None:
        artifact = SecretArtifact(
            Path("/run/secrets/wiki_diagram_app_key"),
            CredentialSource.CLUSTER_SECRET_MOUNT,
        )

        outcome = SecretProvisioner(fake_runner, SECRET).provision(artifact)

        assert outcome is ProvisionOutcome.ALREADY_MOUNTED
        assert fake_runner.calls == []

    @pytest.mark.parametrize(
        "probe",
        [ok("false\n"), ok(""), fail("Cannot connect to the Docker daemon")],
    )
    def test_not_a_manager_is_skipped(self, fake_runner: FakeCommandRunner, probe) -> None:
        fake_runner.on(SWARM_PROBE, probe)

        outcome = SecretProvisioner(fake_runner, SECRET).provision(LOCAL_KEY)

        assert outcome is ProvisionOutcome.SKIPPED_NOT_MANAGER
        assert not fake_runner.ran("docker", "secret")

    def test_creates_secret_on_manager(self, manager: FakeCommandRunner) -> None:
        outcome = SecretProvisioner(manager, SECRET).provision(LOCAL_KEY)

        assert outcome is ProvisionOutcome.CREATED
        assert manager.calls_to("docker", "secret") == [
            ["docker", "secret", "create", SECRET, "/home/dev/key.pem"]
        ]

    def test_existing_secret_is_success(self, manager: FakeCommandRunner) -> None:
        manager.on(
            ["docker", "secret", "create"],
            fail(f"Error response from daemon: rpc error: secret {SECRET} already exists"),
        )

        outcome = SecretProvisioner(manager, SECRET).provision(LOCAL_KEY)

        assert outcome is ProvisionOutcome.ALREADY_EXISTS

    def test_other_failure_raises(self, manager: FakeCommandRunner) -> None:
        manager.on(["docker", "secret", "create"], fail("permission denied"))

        with pytest.raises(ProvisionError) as exc_info:
            SecretProvisioner(manager, SECRET).provision(LOCAL_KEY)

        assert exc_info.value.secret_name == SECRET
        assert "permission denied" in exc_info.value.output

    def test_manager_state_is_queried_every_time(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(SWARM_PROBE, ok("false"), ok("true"))
        provisioner = SecretProvisioner(fake_runner, SECRET)

        assert provisioner.provision(LOCAL_KEY) is ProvisionOutcome.SKIPPED_NOT_MANAGER
        assert provisioner.provision(LOCAL_KEY) is ProvisionOutcome.CREATED
