"""Credential resolution and provisioning exceptions."""

from __future__ import annotations

from pathlib import Path

from toolwarden.exceptions.base import ToolwardenError

__all__ = [
    "CredentialError",
    "CredentialNotFoundError",
    "EnvPathMissingError",
    "CredentialUnreadableError",
    "ProvisionError",
]


class CredentialError(ToolwardenError):
    """Base exception for credential lookup and provisioning failures."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when no credential source yields a key file.

    Attributes:
        message: Human-readable error message listing every attempted source.
        attempted: Descriptions of the sources that were tried, in order.
    """

    def __init__(self, attempted: tuple[str, ...]) -> None:
        """Initialize the CredentialNotFoundError.

        Args:
            attempted: Descriptions of the sources that were tried, in order.
        """
        self.attempted = attempted
        lines = ["No GitHub App key found. Expected one of:"]
        lines.extend(f"  - {source}" for source in attempted)
        super().__init__("\n".join(lines))


class EnvPathMissingError(CredentialError):
    """Raised when the override variable names a path that does not exist.

    An explicit override that is broken is a configuration error; lower
    precedence sources are not consulted.

    Attributes:
        message: Human-readable error message.
        env_var: Name of the override variable.
        path: The path the variable points to.
    """

    def __init__(self, env_var: str, path: str) -> None:
        self.env_var = env_var
        self.path = path
        super().__init__(f"GitHub App key missing at {path} (from ${env_var})")


class CredentialUnreadableError(CredentialError):
    """Raised when the selected key file exists but cannot be read.

    Attributes:
        message: Human-readable error message.
        path: The selected key file.
        reason: Underlying OS error text, if any.
    """

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"GitHub App key found but unreadable at {path}{detail}")


class ProvisionError(CredentialError):
    """Raised when publishing the key as a cluster secret fails.

    The idempotent "already exists" response is not an error and never
    produces this exception.

    Attributes:
        message: Human-readable error message.
        secret_name: Name of the cluster secret.
        output: Output captured from the secret store command.
    """

    def __init__(self, secret_name: str, output: str = "") -> None:
        self.secret_name = secret_name
        self.output = output
        detail = f": {output.strip()}" if output.strip() else ""
        super().__init__(f"Failed to create Docker secret '{secret_name}'{detail}")
