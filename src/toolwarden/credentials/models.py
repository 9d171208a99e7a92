"""Credential data models.

This module defines:
- CredentialSource: where a key file was found, in precedence order
- SecretArtifact: a resolved key file and its origin
- ProvisionOutcome: what publishing the key as a cluster secret did
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path

__all__ = ["CredentialSource", "SecretArtifact", "ProvisionOutcome"]


class CredentialSource(IntEnum):
    """Key file sources. Lower values take precedence."""

    ENV_OVERRIDE = 1
    CLUSTER_SECRET_MOUNT = 2
    LOCAL_FILE_GLOB = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    CredentialSource.ENV_OVERRIDE: "environment variable",
    CredentialSource.CLUSTER_SECRET_MOUNT: "Docker secret",
    CredentialSource.LOCAL_FILE_GLOB: "local file",
}


@dataclass(frozen=True, slots=True)
class SecretArtifact:
    """A key file selected by the resolver.

    Resolved fresh on every run and never cached.

    Attributes:
        path: Location of the key file.
        origin: The source that produced it.
    """

    path: Path
    origin: CredentialSource


class ProvisionOutcome(str, Enum):
    """Result of publishing a key file as a cluster secret."""

    ALREADY_MOUNTED = "already_mounted"
    SKIPPED_NOT_MANAGER = "skipped_not_manager"
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
