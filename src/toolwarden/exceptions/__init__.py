"""Toolwarden exception hierarchy.

All exceptions can be imported from this package:
    from toolwarden.exceptions import InstallError, CredentialNotFoundError
"""

from __future__ import annotations

# Base exception
from toolwarden.exceptions.base import ToolwardenError

# Configuration exceptions
from toolwarden.exceptions.config import ConfigError

# Credential exceptions
from toolwarden.exceptions.credentials import (
    CredentialError,
    CredentialNotFoundError,
    CredentialUnreadableError,
    EnvPathMissingError,
    ProvisionError,
)

# Diagram pipeline exceptions
from toolwarden.exceptions.diagrams import (
    DiagramError,
    DiagramSourceError,
    RenderError,
)

# Orchestration exceptions
from toolwarden.exceptions.orchestration import (
    DuplicateStepNameError,
    IncompleteRunError,
    OrchestrationError,
    StepFailedError,
)

# Resource exceptions
from toolwarden.exceptions.resource import (
    InstallError,
    IntegrityCheckError,
    NotInstalledError,
    PostInstallVerificationError,
    ResourceError,
    UnreachableError,
    UnsupportedPlatformError,
    VersionMismatchError,
)

# Runner exceptions
from toolwarden.exceptions.runner import RunnerError, WorkingDirectoryError

__all__ = [
    # Base
    "ToolwardenError",
    # Config
    "ConfigError",
    # Credentials
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialUnreadableError",
    "EnvPathMissingError",
    "ProvisionError",
    # Diagrams
    "DiagramError",
    "DiagramSourceError",
    "RenderError",
    # Orchestration
    "DuplicateStepNameError",
    "IncompleteRunError",
    "OrchestrationError",
    "StepFailedError",
    # Resources
    "InstallError",
    "IntegrityCheckError",
    "NotInstalledError",
    "PostInstallVerificationError",
    "ResourceError",
    "UnreachableError",
    "UnsupportedPlatformError",
    "VersionMismatchError",
    # Runner
    "RunnerError",
    "WorkingDirectoryError",
]
