"""Self-healing dependency resources.

Each resource checks one external tool (``verify``) and, where an installer
exists, repairs it (``ensure``). Resources share the ``heal`` composition
but not a base class.
"""

from __future__ import annotations

from toolwarden.resources.artifacts import ArtifactDownloader, sha256_of
from toolwarden.resources.container import DockerEngine
from toolwarden.resources.drift import (
    DriftChecker,
    parse_go_release_text,
    parse_npm_latest,
)
from toolwarden.resources.healing import heal
from toolwarden.resources.models import (
    DriftNotice,
    HealOutcome,
    ResourceState,
    VersionPin,
    state_for_error,
)
from toolwarden.resources.platform import HostPlatform, detect_platform
from toolwarden.resources.protocols import SelfHealingResource
from toolwarden.resources.renderer import MermaidCli
from toolwarden.resources.system_libs import SystemLibraries
from toolwarden.resources.toolchain import GoToolchain, parse_go_version
from toolwarden.resources.vcs import GitClient, GitIdentity, RepositoryInfo

__all__ = [
    "ArtifactDownloader",
    "DockerEngine",
    "DriftChecker",
    "DriftNotice",
    "GitClient",
    "GitIdentity",
    "GoToolchain",
    "HealOutcome",
    "HostPlatform",
    "MermaidCli",
    "RepositoryInfo",
    "ResourceState",
    "SelfHealingResource",
    "SystemLibraries",
    "VersionPin",
    "detect_platform",
    "heal",
    "parse_go_release_text",
    "parse_go_version",
    "parse_npm_latest",
    "sha256_of",
    "state_for_error",
]
