"""Docker engine and Buildx plugin resource."""

from __future__ import annotations

import platform
from collections.abc import Sequence

from toolwarden.exceptions import (
    InstallError,
    NotInstalledError,
    UnreachableError,
    UnsupportedPlatformError,
)
from toolwarden.logging import get_logger
from toolwarden.resources.healing import heal
from toolwarden.resources.models import HealOutcome
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["DockerEngine"]

logger = get_logger(__name__)

TOOL_NAME = "docker"

_KEYRING = "/etc/apt/keyrings/docker.gpg"


class DockerEngine:
    """Docker engine reachability plus the Buildx plugin.

    Verification is read-only: the binary must be on PATH, the daemon must
    answer ``docker version`` and ``docker buildx version`` must succeed.
    Installation is Linux only and uses Docker's official apt repository.
    """

    name = "Docker Engine & Buildx"

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        apt_packages: Sequence[str] = (
            "docker-ce",
            "docker-ce-cli",
            "containerd.io",
            "docker-buildx-plugin",
            "docker-compose-plugin",
        ),
        gpg_url: str = "https://download.docker.com/linux/ubuntu/gpg",
        repository_url: str = "https://download.docker.com/linux/ubuntu",
        system: str | None = None,
    ) -> None:
        self._executor = executor
        self._apt_packages = tuple(apt_packages)
        self._gpg_url = gpg_url
        self._repository_url = repository_url
        self._system = system

    def server_version(self) -> str:
        """Return the daemon version.

        Raises:
            NotInstalledError: No ``docker`` binary on PATH.
            UnreachableError: The daemon did not answer.
        """
        if self._executor.which("docker") is None:
            raise NotInstalledError(
                "docker binary not found in PATH",
                tool=TOOL_NAME,
                hint="Run 'toolwarden docker deps' to install Docker Engine",
            )
        result = self._executor.run(
            ["docker", "version", "--format", "{{.Server.Version}}"]
        )
        if not result.success:
            raise UnreachableError(
                f"docker daemon not reachable: {result.output.strip()}",
                tool=TOOL_NAME,
            )
        return result.stdout.strip()

    def buildx_available(self) -> bool:
        return self._executor.run(["docker", "buildx", "version"]).success

    def verify(self) -> None:
        version = self.server_version()
        logger.info("docker_engine_detected", version=version)
        if not self.buildx_available():
            raise NotInstalledError(
                "docker buildx plugin missing",
                tool="docker-buildx",
                hint="Run: docker buildx install",
            )

    def ensure(self) -> HealOutcome:
        """Install the engine and Buildx as needed, then verify."""
        return heal(TOOL_NAME, self.verify, self.install)

    def install(self) -> None:
        """Install whichever of engine and Buildx is missing.

        Raises:
            UnsupportedPlatformError: The host is not Linux.
            InstallError: An install command failed.
        """
        if self._executor.which("docker") is None:
            self._install_engine()
        if not self.buildx_available():
            logger.info("install_started", tool="docker-buildx")
            self._run_or_fail(["docker", "buildx", "install"])

    def install_commands(self) -> list[list[str]]:
        """Command sequence that adds Docker's apt repository and installs the engine."""
        source_line = (
            f'echo "deb [arch=$(dpkg --print-architecture) signed-by={_KEYRING}] '
            f'{self._repository_url} $(. /etc/os-release && echo $VERSION_CODENAME) stable" '
            "| sudo tee /etc/apt/sources.list.d/docker.list > /dev/null"
        )
        return [
            ["sudo", "apt-get", "update", "-y"],
            ["sudo", "apt-get", "install", "-y", "ca-certificates", "curl", "gnupg"],
            ["sudo", "install", "-m", "0755", "-d", "/etc/apt/keyrings"],
            ["bash", "-c", f"curl -fsSL {self._gpg_url} | sudo gpg --dearmor -o {_KEYRING}"],
            ["bash", "-c", source_line],
            ["sudo", "apt-get", "update", "-y"],
            ["sudo", "apt-get", "install", "-y", *self._apt_packages],
        ]

    def _install_engine(self) -> None:
        system = (self._system or platform.system()).lower()
        if system != "linux":
            raise UnsupportedPlatformError(TOOL_NAME, system, platform.machine().lower())

        logger.info("install_started", tool=TOOL_NAME, source=self._repository_url)
        for command in self.install_commands():
            self._run_or_fail(command)
        logger.info("docker_engine_installed")

    def _run_or_fail(self, command: list[str]) -> None:
        result = self._executor.run(command)
        if not result.success:
            raise InstallError(
                f"Failed running {' '.join(command)}: {result.output.strip()}",
                tool=TOOL_NAME,
            )
