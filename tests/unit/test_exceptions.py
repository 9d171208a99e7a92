"""Unit tests for exception classes.

Tests the custom exception hierarchy and the data each exception carries:
- Resource errors (not installed, version mismatch, install failures)
- Credential errors
- Orchestration errors
- Diagram errors
"""

from __future__ import annotations

from pathlib import Path

import pytest

from toolwarden.exceptions import (
    ConfigError,
    CredentialError,
    CredentialNotFoundError,
    CredentialUnreadableError,
    DiagramError,
    DiagramSourceError,
    DuplicateStepNameError,
    EnvPathMissingError,
    InstallError,
    IntegrityCheckError,
    NotInstalledError,
    OrchestrationError,
    PostInstallVerificationError,
    ProvisionError,
    RenderError,
    ResourceError,
    StepFailedError,
    ToolwardenError,
    UnreachableError,
    UnsupportedPlatformError,
    VersionMismatchError,
    WorkingDirectoryError,
)

# =============================================================================
# Hierarchy
# =============================================================================


class TestHierarchy:
    """Every Toolwarden exception is catchable as ToolwardenError."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("bad"),
            NotInstalledError("missing"),
            VersionMismatchError("go", found="1.22.0", expected="1.25.3"),
            UnreachableError("down"),
            UnsupportedPlatformError("go", "windows", "amd64"),
            InstallError("failed"),
            CredentialNotFoundError(("env var: X",)),
            ProvisionError("secret"),
            DuplicateStepNameError("Git"),
            RenderError("boom"),
            WorkingDirectoryError("no dir"),
        ],
    )
    def test_is_toolwarden_error(self, error: ToolwardenError) -> None:
        assert isinstance(error, ToolwardenError)
        assert error.message == str(error)

    def test_post_install_failure_is_an_install_error(self) -> None:
        assert issubclass(PostInstallVerificationError, InstallError)
        assert issubclass(InstallError, ResourceError)

    def test_credential_errors_share_a_base(self) -> None:
        for cls in (
            CredentialNotFoundError,
            EnvPathMissingError,
            CredentialUnreadableError,
            ProvisionError,
        ):
            assert issubclass(cls, CredentialError)

    def test_diagram_errors_share_a_base(self) -> None:
        assert issubclass(DiagramSourceError, DiagramError)
        assert issubclass(RenderError, DiagramError)


# =============================================================================
# Resource errors
# =============================================================================


class TestResourceErrors:
    def test_version_mismatch_message(self) -> None:
        error = VersionMismatchError("go", found="1.22.0", expected="1.25.3")

        assert error.message == "go version mismatch: found 1.22.0, expected 1.25.3"
        assert error.tool == "go"

    def test_not_installed_hint_defaults_to_none(self) -> None:
        assert NotInstalledError("mmdc missing", tool="mmdc").hint is None

    def test_unsupported_platform_fields(self) -> None:
        error = UnsupportedPlatformError("go", "windows", "amd64")

        assert error.os_name == "windows"
        assert error.arch == "amd64"
        assert "windows/amd64" in error.message

    def test_integrity_check_names_file_and_digests(self) -> None:
        error = IntegrityCheckError(
            "go", Path("/tmp/go1.25.3.linux-amd64.tar.gz"), expected="aa", actual="bb"
        )

        assert "go1.25.3.linux-amd64.tar.gz" in error.message
        assert "expected aa" in error.message
        assert "got bb" in error.message

    def test_install_error_keeps_cause(self) -> None:
        cause = UnsupportedPlatformError("docker", "darwin", "arm64")
        error = InstallError("Failed to install docker", tool="docker", cause=cause)

        assert error.cause is cause


# =============================================================================
# Credential errors
# =============================================================================


class TestCredentialErrors:
    def test_not_found_lists_sources_in_order(self) -> None:
        attempted = (
            "env var: WIKI_APP_PRIVATE_KEY_PATH",
            "Docker secret: /run/secrets/wiki_diagram_app_key",
            "local file: ~/.config/github-apps/wiki-diagram-publisher*.pem",
        )

        error = CredentialNotFoundError(attempted)

        lines = error.message.splitlines()
        assert lines[0] == "No GitHub App key found. Expected one of:"
        assert lines[1:] == [f"  - {source}" for source in attempted]

    def test_env_path_missing_message(self) -> None:
        error = EnvPathMissingError("WIKI_APP_PRIVATE_KEY_PATH", "/nope.pem")

        assert error.message == (
            "GitHub App key missing at /nope.pem (from $WIKI_APP_PRIVATE_KEY_PATH)"
        )

    def test_unreadable_with_and_without_reason(self) -> None:
        with_reason = CredentialUnreadableError(Path("/k.pem"), reason="Permission denied")
        without = CredentialUnreadableError(Path("/k.pem"))

        assert with_reason.message.endswith(": Permission denied")
        assert without.message == "GitHub App key found but unreadable at /k.pem"

    def test_provision_error_includes_output(self) -> None:
        error = ProvisionError("app_key", output="permission denied\n")

        assert error.message == "Failed to create Docker secret 'app_key': permission denied"
        assert ProvisionError("app_key").message == "Failed to create Docker secret 'app_key'"


# =============================================================================
# Orchestration errors
# =============================================================================


class TestOrchestrationErrors:
    def test_step_failed_prefixes_step_name(self) -> None:
        cause = NotInstalledError("Go not found in PATH", tool="go")

        error = StepFailedError("Go toolchain", cause)

        assert isinstance(error, OrchestrationError)
        assert error.message == "Go toolchain failed: Go not found in PATH"
        assert error.cause is cause

    def test_step_failed_with_plain_exception(self) -> None:
        error = StepFailedError("Git", OSError("disk full"))

        assert error.message == "Git failed: disk full"

    def test_duplicate_step_name(self) -> None:
        error = DuplicateStepNameError("Git")

        assert "'Git'" in error.message


# =============================================================================
# Config errors
# =============================================================================


class TestConfigError:
    def test_field_and_value(self) -> None:
        error = ConfigError("Invalid configuration", field="drift.timeout_seconds", value=-1)

        assert error.field == "drift.timeout_seconds"
        assert error.value == -1

    def test_defaults(self) -> None:
        error = ConfigError("oops")

        assert error.field is None
        assert error.value is None
