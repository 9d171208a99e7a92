"""Pinned Go toolchain: version check and tarball installer."""

from __future__ import annotations

from pathlib import Path

from toolwarden.exceptions import InstallError, NotInstalledError, VersionMismatchError
from toolwarden.logging import get_logger
from toolwarden.resources.artifacts import ArtifactDownloader
from toolwarden.resources.drift import DriftChecker, parse_go_release_text
from toolwarden.resources.healing import heal
from toolwarden.resources.models import HealOutcome, VersionPin
from toolwarden.resources.platform import HostPlatform, detect_platform
from toolwarden.runners.protocols import CommandExecutor

__all__ = ["GoToolchain", "parse_go_version"]

logger = get_logger(__name__)

TOOL_NAME = "go"


def parse_go_version(output: str) -> str | None:
    """Extract the version from ``go version`` output.

    ``go version go1.25.3 linux/amd64`` → ``1.25.3``. Returns None when the
    output has fewer than three whitespace-separated fields.
    """
    fields = output.split()
    if len(fields) < 3:
        return None
    return fields[2].removeprefix("go")


class GoToolchain:
    """The Go toolchain pinned to one exact release.

    Attributes:
        name: Resource name shown in step reports.
        pin: The pinned version.
    """

    name = "Go toolchain"

    def __init__(
        self,
        executor: CommandExecutor,
        version: str,
        *,
        install_prefix: Path = Path("/usr/local"),
        download_base_url: str = "https://go.dev/dl",
        latest_version_url: str = "https://go.dev/VERSION?m=text",
        staging_dir: Path = Path("/tmp"),
        downloader: ArtifactDownloader | None = None,
        drift: DriftChecker | None = None,
        host: HostPlatform | None = None,
    ) -> None:
        self.pin = VersionPin(tool=TOOL_NAME, version=version)
        self._executor = executor
        self._install_prefix = install_prefix
        self._download_base_url = download_base_url.rstrip("/")
        self._latest_version_url = latest_version_url
        self._staging_dir = staging_dir
        self._downloader = downloader
        self._drift = drift
        self._host = host

    def installed_version(self) -> str:
        """Return the version reported by ``go version``.

        Raises:
            NotInstalledError: ``go`` is not runnable.
            VersionMismatchError: The output cannot be parsed; ``found`` holds
                the raw output.
        """
        result = self._executor.run(["go", "version"])
        if not result.success:
            raise NotInstalledError(
                "go binary not found in PATH",
                tool=TOOL_NAME,
                hint=f"Run 'toolwarden go deps' to install Go {self.pin.version}",
            )
        version = parse_go_version(result.stdout)
        if version is None:
            raise VersionMismatchError(
                TOOL_NAME,
                found=result.stdout.strip() or "<empty output>",
                expected=self.pin.version,
            )
        return version

    def verify(self) -> None:
        """Check that the installed Go matches the pin.

        Raises:
            NotInstalledError: Go is missing.
            VersionMismatchError: Go reports a different version.
        """
        logger.info("verifying", tool=TOOL_NAME, target=self.pin.version)
        current = self.installed_version()
        if not self.pin.matches(current):
            raise VersionMismatchError(TOOL_NAME, found=current, expected=self.pin.version)

        if self._drift is not None:
            self._drift.check(self.pin, self._latest_version_url, parse_go_release_text)
        logger.info("verified", tool=TOOL_NAME, version=current)

    def ensure(self) -> HealOutcome:
        """Install the pinned Go release if verification fails."""
        return heal(TOOL_NAME, self.verify, self.install)

    def archive_url(self, host: HostPlatform) -> str:
        return f"{self._download_base_url}/go{self.pin.version}.{host.os}-{host.arch}.tar.gz"

    def install(self) -> None:
        """Download, verify and extract the pinned release.

        Any existing ``<prefix>/go`` tree is removed before extraction; the
        new tree replaces it rather than merging into it.

        Raises:
            UnsupportedPlatformError: Host is outside the release matrix.
            InstallError: Download, extraction or the post-install probe failed.
            IntegrityCheckError: Published checksum does not match.
        """
        host = self._host or detect_platform(TOOL_NAME)
        url = self.archive_url(host)
        archive = self._staging_dir / url.rsplit("/", 1)[-1]

        logger.info(
            "install_started",
            tool=TOOL_NAME,
            version=self.pin.version,
            platform=str(host),
        )
        downloader = self._downloader or ArtifactDownloader()
        downloader.fetch(TOOL_NAME, url, archive)

        go_root = self._install_prefix / "go"
        logger.info("extracting", tool=TOOL_NAME, prefix=str(self._install_prefix))
        self._run_or_fail(["sudo", "rm", "-rf", str(go_root)])
        self._run_or_fail(
            ["sudo", "tar", "-C", str(self._install_prefix), "-xzf", str(archive)]
        )

        probe = self._run_or_fail([str(go_root / "bin" / "go"), "version"])
        logger.info("installed_binary_reports", tool=TOOL_NAME, output=probe.strip())
        reported = parse_go_version(probe)
        if reported is None or not self.pin.matches(reported):
            raise InstallError(
                f"Installed Go reports {probe.strip()!r}, expected {self.pin.version}",
                tool=TOOL_NAME,
            )

        if self._executor.which("go") is None:
            logger.warning(
                "go_not_on_path",
                hint=f"{go_root / 'bin'} may not be in your PATH; "
                "update your shell configuration.",
            )

    def _run_or_fail(self, command: list[str]) -> str:
        result = self._executor.run(command)
        if not result.success:
            raise InstallError(
                f"Command failed ({result.returncode}): {' '.join(command)}: "
                f"{result.output.strip()}",
                tool=TOOL_NAME,
            )
        return result.stdout
