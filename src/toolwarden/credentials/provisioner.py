"""Publish a resolved key file as a Docker Swarm secret."""

from __future__ import annotations

from toolwarden.credentials.models import (
    CredentialSource,
    ProvisionOutcome,
    SecretArtifact,
)
from toolwarden.exceptions import ProvisionError
from toolwarden.logging import get_logger
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["SecretProvisioner"]

logger = get_logger(__name__)

_ALREADY_EXISTS = "already exists"


class SecretProvisioner:
    """Create the cluster secret when this host manages a swarm.

    Provisioning is idempotent: an existing secret of the same name counts
    as success. Hosts that are not swarm managers are skipped without error.
    """

    def __init__(self, executor: CommandExecutor, secret_name: str) -> None:
        self._executor = executor
        self.secret_name = secret_name

    def is_swarm_manager(self) -> bool:
        """Query live whether this host is a controlling swarm node.

        A failing probe (no daemon, no docker) counts as "not a manager".
        """
        result = self._executor.run(
            ["docker", "info", "--format", "{{.Swarm.ControlAvailable}}"]
        )
        return result.success and result.stdout.strip() == "true"

    def provision(self, artifact: SecretArtifact) -> ProvisionOutcome:
        """Make ``artifact`` available as the cluster secret.

        Raises:
            ProvisionError: ``docker secret create`` failed for a reason
                other than the secret already existing.
        """
        if artifact.origin is CredentialSource.CLUSTER_SECRET_MOUNT:
            logger.info("secret_already_mounted", path=str(artifact.path))
            return ProvisionOutcome.ALREADY_MOUNTED

        if not self.is_swarm_manager():
            logger.info("swarm_inactive_using_local_key", path=str(artifact.path))
            return ProvisionOutcome.SKIPPED_NOT_MANAGER

        logger.info("creating_secret", secret=self.secret_name, path=str(artifact.path))
        result = self._executor.run(
            ["docker", "secret", "create", self.secret_name, str(artifact.path)]
        )
        if result.success:
            logger.info("secret_created", secret=self.secret_name)
            return ProvisionOutcome.CREATED
        if _ALREADY_EXISTS in result.output:
            logger.info("secret_already_exists", secret=self.secret_name)
            return ProvisionOutcome.ALREADY_EXISTS
        raise ProvisionError(self.secret_name, output=result.output)
