"""Git client resource: presence check, identity advice and repository info."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from toolwarden.exceptions import NotInstalledError, UnreachableError
from toolwarden.logging import get_logger
from toolwarden.resources.healing import heal
from toolwarden.resources.models import HealOutcome
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["GitClient", "GitIdentity", "RepositoryInfo"]

logger = get_logger(__name__)

TOOL_NAME = "git"


@dataclass(frozen=True, slots=True)
class GitIdentity:
    """Global commit identity. Empty strings mean "not configured"."""

    name: str
    email: str

    @property
    def configured(self) -> bool:
        return bool(self.name and self.email)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True, slots=True)
class RepositoryInfo:
    """Snapshot of the current repository.

    Attributes:
        branch: Current branch name (``HEAD`` when detached).
        remote: URL of ``origin``, empty if none.
        last_commit: ``<short sha> - <subject> (<relative date>)``.
        checked_at: When the snapshot was taken.
    """

    branch: str
    remote: str
    last_commit: str
    checked_at: datetime


class GitClient:
    """Git on PATH. There is no installer; ``ensure()`` only advises."""

    name = "Git"

    def __init__(self, executor: CommandExecutor) -> None:
        self._executor = executor

    def version(self) -> str:
        result = self._executor.run(["git", "--version"])
        if not result.success:
            raise NotInstalledError(
                f"Git not found in PATH: {result.output.strip()}",
                tool=TOOL_NAME,
                hint="Install git with your system package manager",
            )
        return result.stdout.strip()

    def verify(self) -> None:
        logger.info("verified", tool=TOOL_NAME, version=self.version())

    def identity(self) -> GitIdentity:
        """Read ``user.name`` and ``user.email`` from the global config."""
        return GitIdentity(
            name=self._stdout(["git", "config", "--global", "user.name"]),
            email=self._stdout(["git", "config", "--global", "user.email"]),
        )

    def check_config(self) -> GitIdentity:
        """Log advice when the commit identity is incomplete. Never raises."""
        identity = self.identity()
        if identity.configured:
            logger.info("git_identity_configured", identity=str(identity))
        else:
            logger.warning(
                "git_identity_missing",
                hint='git config --global user.name "Your Name" && '
                'git config --global user.email "you@example.com"',
            )
        return identity

    def ensure(self) -> HealOutcome:
        outcome = heal(TOOL_NAME, self.verify)
        self.check_config()
        return outcome

    def check_remote(self) -> int:
        """Confirm ``origin`` answers ``git ls-remote``.

        Returns:
            Number of bytes the remote returned.

        Raises:
            UnreachableError: The remote could not be listed.
        """
        result = self._executor.run(["git", "ls-remote", "--heads", "origin"])
        if not result.success:
            raise UnreachableError(
                f"Failed to reach Git remote: {result.output.strip()}",
                tool=TOOL_NAME,
            )
        size = len(result.stdout.encode())
        logger.info("git_remote_reachable", bytes=size)
        return size

    def info(self) -> RepositoryInfo:
        """Describe the current repository. Missing pieces are empty strings."""
        return RepositoryInfo(
            branch=self._stdout(["git", "rev-parse", "--abbrev-ref", "HEAD"]),
            remote=self._stdout(["git", "config", "--get", "remote.origin.url"]),
            last_commit=self._stdout(
                ["git", "log", "-1", "--pretty=format:%h - %s (%cr)"]
            ),
            checked_at=datetime.now(timezone.utc),
        )

    def _stdout(self, command: list[str]) -> str:
        result = self._executor.run(command)
        return result.stdout.strip() if result.success else ""
