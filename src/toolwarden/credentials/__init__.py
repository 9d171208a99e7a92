"""GitHub App private key resolution and provisioning."""

from __future__ import annotations

from toolwarden.credentials.models import (
    CredentialSource,
    ProvisionOutcome,
    SecretArtifact,
)
from toolwarden.credentials.provisioner import SecretProvisioner
from toolwarden.credentials.resolver import CredentialResolver
from toolwarden.credentials.resource import AppKeyResource

__all__ = [
    "AppKeyResource",
    "CredentialResolver",
    "CredentialSource",
    "ProvisionOutcome",
    "SecretArtifact",
    "SecretProvisioner",
]
