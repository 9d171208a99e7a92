"""Mermaid CLI (``mmdc``) resource installed globally through npm."""

from __future__ import annotations

from toolwarden.exceptions import InstallError, NotInstalledError, VersionMismatchError
from toolwarden.logging import get_logger
from toolwarden.resources.drift import DriftChecker, parse_npm_latest
from toolwarden.resources.healing import heal
from toolwarden.resources.models import HealOutcome, VersionPin
from toolwarden.resources.system_libs import SystemLibraries
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["MermaidCli"]

logger = get_logger(__name__)

TOOL_NAME = "mmdc"


class MermaidCli:
    """The Mermaid CLI pinned to one npm release.

    ``mmdc --version`` output must contain the pinned version string.
    System libraries are a prerequisite of ``ensure()``; they are installed
    first and not re-checked by this resource.
    """

    name = "Mermaid CLI"

    def __init__(
        self,
        executor: CommandExecutor,
        version: str,
        *,
        package: str = "@mermaid-js/mermaid-cli",
        latest_version_url: str = "https://registry.npmjs.org/@mermaid-js/mermaid-cli/latest",
        system_libraries: SystemLibraries | None = None,
        drift: DriftChecker | None = None,
    ) -> None:
        self.pin = VersionPin(tool=TOOL_NAME, version=version)
        self._executor = executor
        self._package = package
        self._latest_version_url = latest_version_url
        self._system_libraries = system_libraries
        self._drift = drift

    @property
    def install_spec(self) -> str:
        return f"{self._package}@{self.pin.version}"

    def version(self) -> str:
        """Return the raw ``mmdc --version`` output.

        Raises:
            NotInstalledError: ``mmdc`` is not on PATH.
        """
        result = self._executor.run(["mmdc", "--version"])
        if not result.success:
            raise NotInstalledError(
                "Mermaid CLI not found in PATH",
                tool=TOOL_NAME,
                hint=f"Install it with: npm install -g {self.install_spec}",
            )
        return result.output.strip()

    def verify(self) -> None:
        logger.info("verifying", tool=TOOL_NAME, target=self.pin.version)
        reported = self.version()
        if self.pin.version not in reported:
            raise VersionMismatchError(
                TOOL_NAME, found=reported or "<empty output>", expected=self.pin.version
            )
        if self._drift is not None:
            self._drift.check(self.pin, self._latest_version_url, parse_npm_latest)
        logger.info("verified", tool=TOOL_NAME, version=self.pin.version)

    def install(self) -> None:
        logger.info("install_started", tool=TOOL_NAME, package=self.install_spec)
        result = self._executor.run(["npm", "install", "-g", self.install_spec])
        if not result.success:
            raise InstallError(
                f"Failed to install Mermaid CLI {self.pin.version}: "
                f"{result.output.strip()}",
                tool=TOOL_NAME,
            )

    def ensure(self) -> HealOutcome:
        """Install system libraries, then the pinned CLI if it does not verify."""
        if self._system_libraries is not None:
            self._system_libraries.ensure()
        return heal(TOOL_NAME, self.verify, self.install)
