"""Dataclass models shared by dependency resources.

This module defines:
- VersionPin: a named target version for one external tool
- ResourceState: the transient outcome of checking a resource
- HealOutcome: what ``ensure()`` had to do to satisfy a resource
- DriftNotice: an advisory "newer version available" observation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from toolwarden.exceptions import (
    InstallError,
    NotInstalledError,
    UnreachableError,
    VersionMismatchError,
)

__all__ = [
    "VersionPin",
    "ResourceState",
    "HealOutcome",
    "DriftNotice",
    "state_for_error",
]


@dataclass(frozen=True, slots=True)
class VersionPin:
    """A pinned target version for an external tool.

    Attributes:
        tool: Tool name as shown to the operator (e.g., "go").
        version: Exact version string the tool must report.

    Example:
        >>> pin = VersionPin(tool="go", version="1.25.3")
        >>> pin.matches("1.25.3")
        True
    """

    tool: str
    version: str

    def matches(self, found: str) -> bool:
        """Return True if ``found`` is exactly the pinned version."""
        return found == self.version

    def __str__(self) -> str:
        return f"{self.tool}@{self.version}"


class ResourceState(str, Enum):
    """Transient state of a resource, computed fresh on every check."""

    UNKNOWN = "unknown"
    VERIFIED = "verified"
    MISSING = "missing"
    VERSION_MISMATCH = "version_mismatch"
    INSTALL_FAILED = "install_failed"


class HealOutcome(str, Enum):
    """What ``ensure()`` did to reach a verified state."""

    ALREADY_SATISFIED = "already_satisfied"
    INSTALLED = "installed"


@dataclass(frozen=True, slots=True)
class DriftNotice:
    """Advisory result of comparing a pin against the newest release.

    Attributes:
        pin: The pinned version that was compared.
        latest: Latest version reported by the remote endpoint.
    """

    pin: VersionPin
    latest: str

    @property
    def message(self) -> str:
        return (
            f"A newer {self.pin.tool} version is available ({self.latest}). "
            f"You are pinned to {self.pin.version}."
        )


def state_for_error(error: BaseException | None) -> ResourceState:
    """Map the outcome of a check to a ResourceState.

    Args:
        error: Exception raised by verify()/ensure(), or None on success.

    Returns:
        The matching ResourceState. A daemon that is installed but not
        responding counts as MISSING; anything unrecognised is UNKNOWN.
    """
    if error is None:
        return ResourceState.VERIFIED
    if isinstance(error, VersionMismatchError):
        return ResourceState.VERSION_MISMATCH
    if isinstance(error, InstallError):
        return ResourceState.INSTALL_FAILED
    if isinstance(error, NotInstalledError | UnreachableError):
        return ResourceState.MISSING
    return ResourceState.UNKNOWN
