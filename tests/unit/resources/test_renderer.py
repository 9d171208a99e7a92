"""Tests for the Mermaid CLI resource."""

from __future__ import annotations

import httpx
import pytest

from tests.fixtures.runners import FakeCommandRunner, fail, ok
from toolwarden.exceptions import (
    InstallError,
    NotInstalledError,
    PostInstallVerificationError,
    VersionMismatchError,
)
from toolwarden.resources import DriftChecker, HealOutcome, MermaidCli, SystemLibraries


def _mermaid(
    runner: FakeCommandRunner,
    *,
    libraries: SystemLibraries | None = None,
    drift: DriftChecker | None = None,
) -> MermaidCli:
    return MermaidCli(runner, "10.9.0", system_libraries=libraries, drift=drift)


class TestMermaidVerify:
    def test_output_containing_pin_passes(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], ok("10.9.0\n"))

        _mermaid(fake_runner).verify()

    def test_other_version_raises_mismatch(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], ok("11.4.2\n"))

        with pytest.raises(VersionMismatchError) as exc_info:
            _mermaid(fake_runner).verify()

        assert exc_info.value.found == "11.4.2"
        assert exc_info.value.expected == "10.9.0"

    def test_missing_cli_has_npm_hint(self) -> None:
        runner = FakeCommandRunner(missing={"mmdc"})

        with pytest.raises(NotInstalledError) as exc_info:
            _mermaid(runner).verify()

        assert exc_info.value.hint is not None
        assert "npm install -g @mermaid-js/mermaid-cli@10.9.0" in exc_info.value.hint

    def test_drift_lookup_uses_npm_registry(self, fake_runner: FakeCommandRunner) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"version": "11.4.2"})

        drift = DriftChecker(client=httpx.Client(transport=httpx.MockTransport(handler)))
        fake_runner.on(["mmdc", "--version"], ok("10.9.0"))

        _mermaid(fake_runner, drift=drift).verify()

        assert seen == ["https://registry.npmjs.org/@mermaid-js/mermaid-cli/latest"]

    def test_version_returns_raw_output(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], ok("10.9.0\n"))

        assert _mermaid(fake_runner).version() == "10.9.0"


class TestMermaidEnsure:
    def test_installs_with_npm_when_missing(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], fail(returncode=127), ok("10.9.0"))

        outcome = _mermaid(fake_runner).ensure()

        assert outcome is HealOutcome.INSTALLED
        assert fake_runner.calls_to("npm") == [
            ["npm", "install", "-g", "@mermaid-js/mermaid-cli@10.9.0"]
        ]

    def test_system_libraries_are_ensured_first(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["dpkg", "-s", "libnss3"], fail())
        fake_runner.on(["mmdc", "--version"], ok("10.9.0"))
        libraries = SystemLibraries(fake_runner, ["libnss3"])

        outcome = _mermaid(fake_runner, libraries=libraries).ensure()

        assert outcome is HealOutcome.ALREADY_SATISFIED
        first_apt = fake_runner.calls.index(["sudo", "apt-get", "update", "-q"])
        first_mmdc = fake_runner.calls.index(["mmdc", "--version"])
        assert first_apt < first_mmdc

    def test_system_library_failure_stops_before_cli(
        self, fake_runner: FakeCommandRunner
    ) -> None:
        fake_runner.on(["dpkg", "-s", "libnss3"], fail())
        fake_runner.on(["sudo", "apt-get", "install"], fail("E: broken"))
        libraries = SystemLibraries(fake_runner, ["libnss3"])

        with pytest.raises(InstallError):
            _mermaid(fake_runner, libraries=libraries).ensure()

        assert not fake_runner.ran("mmdc")

    def test_npm_failure_raises_install_error(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], fail(returncode=127))
        fake_runner.on(["npm", "install"], fail("EACCES: permission denied"))

        with pytest.raises(InstallError, match="EACCES"):
            _mermaid(fake_runner).ensure()

    def test_wrong_version_after_install(self, fake_runner: FakeCommandRunner) -> None:
        fake_runner.on(["mmdc", "--version"], ok("9.1.0"))

        with pytest.raises(PostInstallVerificationError):
            _mermaid(fake_runner).ensure()
