from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from toolwarden.exceptions import ConfigError
from toolwarden.logging import get_logger

__all__ = [
    "ToolwardenConfig",
    "GoConfig",
    "MermaidConfig",
    "DockerConfig",
    "CredentialsConfig",
    "DriftConfig",
    "DiagramsConfig",
    "DEFAULT_SYSTEM_LIBRARIES",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

#: Debian/Ubuntu packages headless Chromium needs to run under mmdc.
DEFAULT_SYSTEM_LIBRARIES: tuple[str, ...] = (
    "libatk1.0-0t64",
    "libatk-bridge2.0-0t64",
    "libcups2t64",
    "libdrm2",
    "libxkbcommon0",
    "libxdamage1",
    "libxfixes3",
    "libxrandr2",
    "libasound2t64",
    "libatspi2.0-0t64",
    "libpangocairo-1.0-0",
    "libpango-1.0-0",
    "libcairo2",
    "libgbm1",
    "libnss3",
    "libxshmfence1",
    "libxcomposite1",
    "libxext6",
    "libx11-6",
    "libx11-xcb1",
    "libxcb1",
    "libxrender1",
    "fonts-liberation",
    "libgtk-3-0t64",
)


class GoConfig(BaseModel):
    """Settings for the pinned Go toolchain.

    Attributes:
        version: Pinned Go version used for reproducible builds.
        install_prefix: Directory the ``go`` tree is extracted into.
        download_base_url: Base URL for release archives.
        latest_version_url: Plain-text endpoint naming the newest release.
        staging_dir: Where archives are downloaded before extraction.
    """

    version: str = "1.25.3"
    install_prefix: Path = Path("/usr/local")
    download_base_url: str = "https://go.dev/dl"
    latest_version_url: str = "https://go.dev/VERSION?m=text"
    staging_dir: Path = Path("/tmp")

    @field_validator("version")
    @classmethod
    def strip_go_prefix(cls, v: str) -> str:
        """Accept both ``1.25.3`` and ``go1.25.3``."""
        return v.strip().removeprefix("go")


class MermaidConfig(BaseModel):
    """Settings for the Mermaid CLI renderer."""

    version: str = "10.9.0"
    package: str = "@mermaid-js/mermaid-cli"
    latest_version_url: str = (
        "https://registry.npmjs.org/@mermaid-js/mermaid-cli/latest"
    )
    system_libraries: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_LIBRARIES)
    )


class DockerConfig(BaseModel):
    """Settings for the Docker engine installer."""

    apt_packages: list[str] = Field(
        default_factory=lambda: [
            "docker-ce",
            "docker-ce-cli",
            "containerd.io",
            "docker-buildx-plugin",
            "docker-compose-plugin",
        ]
    )
    gpg_url: str = "https://download.docker.com/linux/ubuntu/gpg"
    repository_url: str = "https://download.docker.com/linux/ubuntu"


class CredentialsConfig(BaseModel):
    """Settings for locating the GitHub App private key.

    Attributes:
        env_var: Override variable naming the key file. Authoritative if set.
        secret_name: Name of the Docker secret holding the key.
        secret_mount_dir: Directory Docker mounts secrets into.
        search_dir: Local directory searched for downloaded key files.
        key_pattern: Filename glob matched inside ``search_dir``. Matches are
            ordered lexicographically, so date-suffixed names sort by recency.
    """

    env_var: str = "WIKI_APP_PRIVATE_KEY_PATH"
    secret_name: str = "wiki_diagram_app_key"
    secret_mount_dir: Path = Path("/run/secrets")
    search_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "github-apps"
    )
    key_pattern: str = "wiki-diagram-publisher*.pem"

    @property
    def secret_mount_path(self) -> Path:
        """Full path of the mounted secret."""
        return self.secret_mount_dir / self.secret_name


class DriftConfig(BaseModel):
    """Settings for the advisory latest-version lookup."""

    enabled: bool = True
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=60.0)


class DiagramsConfig(BaseModel):
    """Settings for the Markdown → Mermaid → image pipeline."""

    source_dir: Path = Path("assets/diagrams/src")
    mmd_dir: Path = Path("assets/diagrams/gen/mmd")
    output_dir: Path = Path("assets/diagrams/gen/png")
    output_format: Literal["png", "svg", "pdf"] = "png"
    mermaid_config: Path = Path("assets/diagrams/mermaid-config.json")
    puppeteer_config: Path = Path("assets/diagrams/puppeteer-config.json")
    background_color: str = "#1B1B2F"


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning(
                            f"Config file {yaml_file} is empty, using defaults."
                        )
                    elif loaded:
                        self._config_data = loaded
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class ToolwardenConfig(BaseSettings):
    """Root configuration object containing all Toolwarden settings."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLWARDEN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    go: GoConfig = Field(default_factory=GoConfig)
    mermaid: MermaidConfig = Field(default_factory=MermaidConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    drift: DriftConfig = Field(default_factory=DriftConfig)
    diagrams: DiagramsConfig = Field(default_factory=DiagramsConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments)
        2. Environment variables (TOOLWARDEN_*)
        3. Project YAML config (./toolwarden.yaml or --config)
        4. User YAML config (~/.config/toolwarden/config.yaml)
        5. Model defaults
        """
        project_config_path = _active_project_config or (
            Path.cwd() / "toolwarden.yaml"
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


# Project config path selected by load_config() for the current load.
_active_project_config: Path | None = None


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/toolwarden/config.yaml
    """
    return Path.home() / ".config" / "toolwarden" / "config.yaml"


def load_config(config_path: Path | None = None) -> ToolwardenConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file.
            Defaults to ./toolwarden.yaml

    Returns:
        ToolwardenConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    global _active_project_config

    if config_path is None:
        config_path = Path.cwd() / "toolwarden.yaml"

    if not config_path.exists():
        logger.info("No project configuration found, using defaults.")

    _active_project_config = config_path
    try:
        return ToolwardenConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _active_project_config = None
