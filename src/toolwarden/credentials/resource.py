"""The GitHub App key as a self-healing resource."""

from __future__ import annotations

from toolwarden.credentials.models import ProvisionOutcome
from toolwarden.credentials.provisioner import SecretProvisioner
from toolwarden.credentials.resolver import CredentialResolver
from toolwarden.logging import get_logger

__all__ = ["AppKeyResource"]

logger = get_logger(__name__)


class AppKeyResource:
    """Resolve the key and publish it as a cluster secret.

    ``verify()`` only resolves. ``ensure()`` resolves, provisions (which is
    idempotent and a no-op off-swarm) and resolves again. A key that cannot
    be found is not something this resource can install, so resolver
    errors propagate unchanged.
    """

    name = "GitHub App private key"

    def __init__(
        self,
        resolver: CredentialResolver,
        provisioner: SecretProvisioner,
    ) -> None:
        self.resolver = resolver
        self.provisioner = provisioner

    def verify(self) -> None:
        self.resolver.resolve()

    def ensure(self) -> ProvisionOutcome:
        artifact = self.resolver.resolve()
        outcome = self.provisioner.provision(artifact)
        logger.info("credential_provisioned", outcome=outcome.value)
        self.verify()
        return outcome
