"""Exceptions raised while verifying or installing external tools."""

from __future__ import annotations

from pathlib import Path

from toolwarden.exceptions.base import ToolwardenError

__all__ = [
    "ResourceError",
    "NotInstalledError",
    "VersionMismatchError",
    "UnreachableError",
    "UnsupportedPlatformError",
    "IntegrityCheckError",
    "InstallError",
    "PostInstallVerificationError",
]


class ResourceError(ToolwardenError):
    """Base exception for dependency resource failures.

    Attributes:
        message: Human-readable error message.
        tool: Name of the tool the failure belongs to (e.g., "go", "mmdc").
    """

    def __init__(self, message: str, tool: str | None = None) -> None:
        """Initialize the ResourceError.

        Args:
            message: Human-readable error message.
            tool: Name of the tool the failure belongs to.
        """
        self.tool = tool
        super().__init__(message)


class NotInstalledError(ResourceError):
    """Raised when a binary, plugin or package is not present on the host.

    Attributes:
        message: Human-readable error message.
        tool: Name of the missing tool.
        hint: Optional remediation hint shown to the operator.
    """

    def __init__(
        self,
        message: str,
        tool: str | None = None,
        hint: str | None = None,
    ) -> None:
        self.hint = hint
        super().__init__(message, tool=tool)


class VersionMismatchError(ResourceError):
    """Raised when an installed tool reports a version other than its pin.

    Attributes:
        message: Human-readable error message.
        tool: Name of the tool.
        found: Version string reported by the installed tool.
        expected: Pinned version.

    Example:
        >>> err = VersionMismatchError("go", found="1.22.0", expected="1.25.3")
        >>> err.message
        'go version mismatch: found 1.22.0, expected 1.25.3'
    """

    def __init__(self, tool: str, found: str, expected: str) -> None:
        """Initialize the VersionMismatchError.

        Args:
            tool: Name of the tool.
            found: Version string reported by the installed tool.
            expected: Pinned version.
        """
        self.found = found
        self.expected = expected
        super().__init__(
            f"{tool} version mismatch: found {found}, expected {expected}",
            tool=tool,
        )


class UnreachableError(ResourceError):
    """Raised when a daemon or remote service is installed but not responding."""

    pass


class UnsupportedPlatformError(ResourceError):
    """Raised when no installer exists for the host OS/architecture.

    Attributes:
        message: Human-readable error message.
        tool: Name of the tool being installed.
        os_name: Host operating system as reported by the platform module.
        arch: Host machine architecture.
    """

    def __init__(self, tool: str, os_name: str, arch: str) -> None:
        self.os_name = os_name
        self.arch = arch
        super().__init__(
            f"Unsupported platform for {tool}: {os_name}/{arch}",
            tool=tool,
        )


class IntegrityCheckError(ResourceError):
    """Raised when a downloaded artifact does not match its published digest.

    Attributes:
        message: Human-readable error message.
        tool: Name of the tool being installed.
        path: Location of the downloaded artifact.
        expected: Published digest.
        actual: Digest computed from the downloaded file.
    """

    def __init__(
        self,
        tool: str,
        path: Path,
        expected: str,
        actual: str,
    ) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum verification failed for {path.name}: "
            f"expected {expected}, got {actual}",
            tool=tool,
        )


class InstallError(ResourceError):
    """Raised when an installer fails.

    The underlying failure is kept on ``cause`` and chained with
    ``raise ... from`` so nothing is discarded on the way up.

    Attributes:
        message: Human-readable error message.
        tool: Name of the tool being installed.
        cause: The exception that made the installation fail.
    """

    def __init__(
        self,
        message: str,
        tool: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.cause = cause
        super().__init__(message, tool=tool)


class PostInstallVerificationError(InstallError):
    """Raised when a tool still fails verification right after installing it."""

    pass
