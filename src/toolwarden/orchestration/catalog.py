"""Default resources and step lists built from configuration.

The factory functions here are the only place configuration values are
turned into constructor arguments; resources themselves never read config.
"""

from __future__ import annotations

from toolwarden.config import ToolwardenConfig
from toolwarden.credentials import AppKeyResource, CredentialResolver, SecretProvisioner
from toolwarden.orchestration.models import DependencyStep
from toolwarden.resources import (
    DockerEngine,
    DriftChecker,
    GitClient,
    GoToolchain,
    MermaidCli,
    SystemLibraries,
)
from toolwarden.runners import CommandExecutor, CommandRunner

__all__ = [
    "build_drift_checker",
    "build_go",
    "build_system_libraries",
    "build_mermaid",
    "build_docker",
    "build_git",
    "build_resolver",
    "build_app_key",
    "dependency_steps",
    "docker_steps",
]


def build_drift_checker(config: ToolwardenConfig) -> DriftChecker:
    return DriftChecker(
        enabled=config.drift.enabled,
        timeout=config.drift.timeout_seconds,
    )


def build_go(
    config: ToolwardenConfig,
    executor: CommandExecutor,
    drift: DriftChecker | None = None,
) -> GoToolchain:
    return GoToolchain(
        executor,
        config.go.version,
        install_prefix=config.go.install_prefix,
        download_base_url=config.go.download_base_url,
        latest_version_url=config.go.latest_version_url,
        staging_dir=config.go.staging_dir,
        drift=drift,
    )


def build_system_libraries(
    config: ToolwardenConfig, executor: CommandExecutor
) -> SystemLibraries:
    return SystemLibraries(executor, config.mermaid.system_libraries)


def build_mermaid(
    config: ToolwardenConfig,
    executor: CommandExecutor,
    drift: DriftChecker | None = None,
) -> MermaidCli:
    return MermaidCli(
        executor,
        config.mermaid.version,
        package=config.mermaid.package,
        latest_version_url=config.mermaid.latest_version_url,
        system_libraries=build_system_libraries(config, executor),
        drift=drift,
    )


def build_docker(config: ToolwardenConfig, executor: CommandExecutor) -> DockerEngine:
    return DockerEngine(
        executor,
        apt_packages=config.docker.apt_packages,
        gpg_url=config.docker.gpg_url,
        repository_url=config.docker.repository_url,
    )


def build_git(executor: CommandExecutor) -> GitClient:
    return GitClient(executor)


def build_resolver(config: ToolwardenConfig) -> CredentialResolver:
    creds = config.credentials
    return CredentialResolver(
        env_var=creds.env_var,
        mount_path=creds.secret_mount_path,
        search_dir=creds.search_dir.expanduser(),
        pattern=creds.key_pattern,
    )


def build_app_key(config: ToolwardenConfig, executor: CommandExecutor) -> AppKeyResource:
    return AppKeyResource(
        build_resolver(config),
        SecretProvisioner(executor, config.credentials.secret_name),
    )


def dependency_steps(
    config: ToolwardenConfig,
    executor: CommandExecutor | None = None,
) -> list[DependencyStep]:
    """Go toolchain (privileged), Mermaid CLI, Git, in that order."""
    executor = executor or CommandRunner()
    drift = build_drift_checker(config)
    return [
        DependencyStep.from_resource(build_go(config, executor, drift), privileged=True),
        DependencyStep.from_resource(build_mermaid(config, executor, drift)),
        DependencyStep.from_resource(build_git(executor)),
    ]


def docker_steps(
    config: ToolwardenConfig,
    executor: CommandExecutor | None = None,
) -> list[DependencyStep]:
    """Docker engine and Buildx, then the GitHub App private key."""
    executor = executor or CommandRunner()
    return [
        DependencyStep.from_resource(build_docker(config, executor)),
        DependencyStep.from_resource(build_app_key(config, executor)),
    ]
