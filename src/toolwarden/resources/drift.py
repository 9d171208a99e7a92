"""Advisory drift detection against a remote "latest version" endpoint.

Drift checks never fail a verification. Network errors, bad responses and
unparsable payloads are logged at info level and the check returns None.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext

import httpx

from toolwarden.logging import get_logger
from toolwarden.resources.models import DriftNotice, VersionPin

__all__ = [
    "DriftChecker",
    "LatestVersionParser",
    "parse_go_release_text",
    "parse_npm_latest",
]

logger = get_logger(__name__)

LatestVersionParser = Callable[[httpx.Response], str]


def parse_go_release_text(response: httpx.Response) -> str:
    """Parse ``https://go.dev/VERSION?m=text``.

    The first line is the release tag, e.g. ``go1.25.3``.
    """
    lines = response.text.strip().splitlines()
    if not lines:
        return ""
    return lines[0].strip().removeprefix("go")


def parse_npm_latest(response: httpx.Response) -> str:
    """Parse an npm registry ``/<package>/latest`` document."""
    payload = response.json()
    version = payload.get("version", "") if isinstance(payload, dict) else ""
    return str(version).strip()


class DriftChecker:
    """Compare version pins against the newest published release.

    An injected client is left open for its owner to close; otherwise a
    short-lived client is created and closed per lookup.

    Attributes:
        enabled: When False, ``check`` returns None without any request.

    Example:
        ```python
        checker = DriftChecker(timeout=5.0)
        notice = checker.check(
            VersionPin("go", "1.25.3"),
            "https://go.dev/VERSION?m=text",
            parse_go_release_text,
        )
        ```
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        enabled: bool = True,
        timeout: float = 5.0,
    ) -> None:
        self.enabled = enabled
        self._client = client
        self._timeout = timeout

    def _open_client(self) -> AbstractContextManager[httpx.Client]:
        if self._client is not None:
            return nullcontext(self._client)
        return httpx.Client(follow_redirects=True, timeout=self._timeout)

    def check(
        self,
        pin: VersionPin,
        url: str,
        parse: LatestVersionParser,
    ) -> DriftNotice | None:
        """Look up the latest release and log a notice if the pin is behind.

        Returns:
            A DriftNotice when the remote version differs from the pin,
            None when it matches or the lookup could not be completed.
        """
        if not self.enabled:
            return None

        try:
            with self._open_client() as client:
                response = client.get(url)
                response.raise_for_status()
                latest = parse(response)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.info(
                "drift_check_skipped",
                tool=pin.tool,
                reason=f"lookup failed: {e}",
            )
            return None
        except ValueError as e:
            logger.info("drift_check_skipped", tool=pin.tool, reason=f"bad payload: {e}")
            return None

        if not latest:
            logger.info(
                "drift_check_skipped",
                tool=pin.tool,
                reason="unable to parse version information from remote source",
            )
            return None

        if pin.matches(latest):
            logger.debug("pin_is_latest", tool=pin.tool, version=pin.version)
            return None

        notice = DriftNotice(pin=pin, latest=latest)
        logger.info("newer_version_available", tool=pin.tool, pinned=pin.version, latest=latest)
        return notice
