"""Locate the GitHub App private key across its possible sources.

Sources are consulted strictly in precedence order:

1. The override environment variable. If it is set, it is authoritative:
   a path that does not exist is an error and nothing else is tried.
2. The Docker secret mount.
3. A glob in the local search directory. Matches are sorted as strings and
   the last one wins, so date-suffixed filenames pick the newest key.

Whichever source is selected must then be readable. An unreadable file is
reported as such; the resolver never falls back to a lower source.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from toolwarden.credentials.models import CredentialSource, SecretArtifact
from toolwarden.exceptions import (
    CredentialNotFoundError,
    CredentialUnreadableError,
    EnvPathMissingError,
)
from toolwarden.logging import get_logger

__all__ = ["CredentialResolver"]

logger = get_logger(__name__)


class CredentialResolver:
    """Resolve the key file from env override, secret mount or local glob.

    Example:
        ```python
        resolver = CredentialResolver(
            env_var="WIKI_APP_PRIVATE_KEY_PATH",
            mount_path=Path("/run/secrets/wiki_diagram_app_key"),
            search_dir=Path.home() / ".config" / "github-apps",
            pattern="wiki-diagram-publisher*.pem",
        )
        artifact = resolver.resolve()
        ```
    """

    def __init__(
        self,
        env_var: str,
        mount_path: Path,
        search_dir: Path,
        pattern: str,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            env_var: Name of the override variable.
            mount_path: Full path of the mounted Docker secret.
            search_dir: Directory searched for local key files.
            pattern: Filename glob matched inside ``search_dir``.
            environ: Environment to read the override from. Defaults to
                ``os.environ`` at resolve time.
        """
        self.env_var = env_var
        self.mount_path = mount_path
        self.search_dir = search_dir
        self.pattern = pattern
        self._environ = environ

    @property
    def attempted(self) -> tuple[str, ...]:
        """Human-readable description of every source, in precedence order."""
        return (
            f"env var: {self.env_var}",
            f"Docker secret: {self.mount_path}",
            f"local file: {self.search_dir / self.pattern}",
        )

    def resolve(self) -> SecretArtifact:
        """Select the key file.

        Returns:
            The selected artifact and its origin.

        Raises:
            EnvPathMissingError: The override is set to a missing path.
            CredentialNotFoundError: No source produced a file.
            CredentialUnreadableError: The selected file cannot be read.
        """
        artifact = self._select()
        self._check_readable(artifact.path)
        logger.info(
            "credential_resolved",
            source=artifact.origin.label,
            path=str(artifact.path),
        )
        return artifact

    def _select(self) -> SecretArtifact:
        environ = self._environ if self._environ is not None else os.environ
        override = environ.get(self.env_var, "")
        if override:
            path = Path(override).expanduser()
            if not path.exists():
                raise EnvPathMissingError(self.env_var, override)
            return SecretArtifact(path=path, origin=CredentialSource.ENV_OVERRIDE)

        if self.mount_path.exists():
            return SecretArtifact(
                path=self.mount_path, origin=CredentialSource.CLUSTER_SECRET_MOUNT
            )

        logger.debug("searching_key_files", search_dir=str(self.search_dir))
        matches = sorted(str(p) for p in self.search_dir.glob(self.pattern))
        if not matches:
            raise CredentialNotFoundError(self.attempted)
        return SecretArtifact(
            path=Path(matches[-1]), origin=CredentialSource.LOCAL_FILE_GLOB
        )

    def _check_readable(self, path: Path) -> None:
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            raise CredentialUnreadableError(path, reason=e.strerror or str(e)) from e
