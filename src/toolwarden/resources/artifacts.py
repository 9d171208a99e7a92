"""Versioned artifact download with optional SHA-256 verification.

A missing digest is not an error: the artifact is treated as unverifiable
and installation proceeds. A digest that exists but does not match the
downloaded bytes is always fatal.
"""

from __future__ import annotations

import hashlib
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

import httpx

from toolwarden.exceptions import InstallError, IntegrityCheckError
from toolwarden.logging import get_logger

__all__ = ["ArtifactDownloader", "sha256_of"]

logger = get_logger(__name__)

_CHUNK_SIZE = 64 * 1024


def sha256_of(path: Path) -> str:
    """Compute the hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class ArtifactDownloader:
    """Download release artifacts and check them against published digests.

    Example:
        ```python
        downloader = ArtifactDownloader()
        archive = downloader.fetch(
            "go",
            "https://go.dev/dl/go1.25.3.linux-amd64.tar.gz",
            Path("/tmp/go1.25.3.linux-amd64.tar.gz"),
        )
        ```
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        """Initialize the downloader.

        Args:
            client: HTTP client to use. Defaults to a redirect-following
                client without a timeout, created and closed per request;
                downloads block until done. An injected client is not closed.
        """
        self._client = client

    def _open_client(self) -> AbstractContextManager[httpx.Client]:
        if self._client is not None:
            return nullcontext(self._client)
        return httpx.Client(follow_redirects=True, timeout=None)

    def download(self, tool: str, url: str, destination: Path) -> Path:
        """Stream ``url`` into ``destination``.

        Raises:
            InstallError: On any HTTP or transport failure.
        """
        destination.parent.mkdir(parents=True, exist_ok=True)
        logger.info("download_started", tool=tool, url=url, destination=str(destination))
        try:
            with self._open_client() as client, client.stream("GET", url) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise InstallError(
                f"Failed to download {tool} from {url}: {e}", tool=tool, cause=e
            ) from e
        return destination

    def fetch_digest(self, tool: str, url: str) -> str | None:
        """Fetch a published SHA-256 digest.

        Returns:
            The lower-cased hex digest, or None when no digest is published
            or it cannot be fetched.
        """
        try:
            with self._open_client() as client:
                response = client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.info("checksum_unavailable", tool=tool, url=url, reason=str(e))
            return None
        if response.status_code != 200:
            logger.info(
                "checksum_unavailable",
                tool=tool,
                url=url,
                status=response.status_code,
            )
            return None
        fields = response.text.split()
        if not fields:
            logger.info("checksum_unavailable", tool=tool, url=url, reason="empty")
            return None
        return fields[0].lower()

    def fetch(
        self,
        tool: str,
        url: str,
        destination: Path,
        checksum_url: str | None = None,
    ) -> Path:
        """Download an artifact and verify it if a digest is published.

        Args:
            tool: Tool name for logs and errors.
            url: Artifact URL.
            destination: Staging path for the artifact.
            checksum_url: Digest URL. Defaults to ``url + ".sha256"``.

        Returns:
            The staged artifact path.

        Raises:
            InstallError: Download failed.
            IntegrityCheckError: A digest was published and does not match.
        """
        self.download(tool, url, destination)

        expected = self.fetch_digest(tool, checksum_url or f"{url}.sha256")
        if expected is None:
            logger.info("checksum_skipped", tool=tool, artifact=destination.name)
            return destination

        actual = sha256_of(destination)
        if actual != expected:
            raise IntegrityCheckError(tool, destination, expected, actual)

        logger.info("checksum_verified", tool=tool, artifact=destination.name)
        return destination
