"""Batch resource for the OS packages headless Chromium needs."""

from __future__ import annotations

from collections.abc import Sequence

from toolwarden.exceptions import InstallError, NotInstalledError
from toolwarden.logging import get_logger
from toolwarden.resources.models import HealOutcome
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["SystemLibraries"]

logger = get_logger(__name__)

TOOL_NAME = "system-libraries"


class SystemLibraries:
    """A fixed list of Debian packages checked with ``dpkg -s``.

    Unlike the other resources, ``ensure()`` does not re-check after
    installing: a successful ``apt-get install`` of the missing subset is
    taken as the result.
    """

    name = "System libraries"

    def __init__(self, executor: CommandExecutor, packages: Sequence[str]) -> None:
        self._executor = executor
        self.packages = tuple(packages)

    def missing(self) -> list[str]:
        """Return the configured packages ``dpkg`` does not report as installed."""
        return [
            pkg
            for pkg in self.packages
            if not self._executor.run(["dpkg", "-s", pkg]).success
        ]

    def verify(self) -> None:
        """Check every package.

        Raises:
            NotInstalledError: One or more packages are missing; the message
                lists them.
        """
        missing = self.missing()
        if missing:
            raise NotInstalledError(
                f"Missing {len(missing)} system libraries: {', '.join(missing)}",
                tool=TOOL_NAME,
                hint="Run 'toolwarden mermaid syslibs' to install them (requires sudo)",
            )
        logger.info("system_libraries_present", count=len(self.packages))

    def ensure(self) -> HealOutcome:
        """Install the missing subset in one apt transaction.

        Raises:
            InstallError: ``apt-get update`` or ``apt-get install`` failed.
        """
        missing = self.missing()
        if not missing:
            logger.info("already_satisfied", tool=TOOL_NAME)
            return HealOutcome.ALREADY_SATISFIED

        logger.warning("system_libraries_missing", missing=missing)
        self._apt(["sudo", "apt-get", "update", "-q"], "failed to update package lists")
        self._apt(
            ["sudo", "apt-get", "install", "-y", *missing],
            "failed to install required libraries",
        )
        logger.info("system_libraries_installed", installed=missing)
        return HealOutcome.INSTALLED

    def _apt(self, command: list[str], failure: str) -> None:
        result = self._executor.run(command)
        if not result.success:
            raise InstallError(
                f"{failure}: {result.output.strip()}",
                tool=TOOL_NAME,
            )
