"""Host OS/architecture detection mapped onto the supported release matrix."""

from __future__ import annotations

import platform
from dataclasses import dataclass

from toolwarden.exceptions import UnsupportedPlatformError

__all__ = ["HostPlatform", "detect_platform", "SUPPORTED_OS", "ARCH_ALIASES"]

SUPPORTED_OS: frozenset[str] = frozenset({"linux", "darwin"})

#: platform.machine() spellings → release archive architecture names
ARCH_ALIASES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True, slots=True)
class HostPlatform:
    """A supported OS/architecture pair, e.g. ``linux/amd64``."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


def detect_platform(
    tool: str,
    system: str | None = None,
    machine: str | None = None,
) -> HostPlatform:
    """Map the host onto the closed set of supported platforms.

    Args:
        tool: Tool being installed, for the error message.
        system: Override for ``platform.system()`` (tests).
        machine: Override for ``platform.machine()`` (tests).

    Returns:
        The normalised HostPlatform.

    Raises:
        UnsupportedPlatformError: For any other OS or architecture.
    """
    raw_os = (system if system is not None else platform.system()).lower()
    raw_arch = (machine if machine is not None else platform.machine()).lower()

    arch = ARCH_ALIASES.get(raw_arch)
    if raw_os not in SUPPORTED_OS or arch is None:
        raise UnsupportedPlatformError(tool, raw_os, raw_arch)
    return HostPlatform(os=raw_os, arch=arch)
