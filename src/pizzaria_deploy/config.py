"""Configuration management for pizzaria-deploy."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

DEFAULT_REPO_URL = "https://github.com/WilliamLeite02/proway-docker.git"


class RepositoryConfig(BaseModel):
    """Git repository holding the application and its compose manifest."""

    url: str = DEFAULT_REPO_URL
    path: Path = Path("/opt/pizzaria")
    remote: str = "origin"
    # Tried in order for fetch, pull and remote revision lookup
    branches: list[str] = Field(default_factory=lambda: ["main", "master"], min_length=1)


class ComposeConfig(BaseModel):
    """How containers are rebuilt and started."""

    command: list[str] = Field(default_factory=lambda: ["docker-compose"], min_length=1)
    file: str = Field(default="docker-compose.yml", description="Manifest path inside checkout")
    prune: bool = Field(default=True, description="Remove old images before rebuilding")
    settle_seconds: float = Field(default=15, ge=0)
    exposed_ports: list[int] = Field(default_factory=lambda: [80, 3000, 8080])


class ProbeConfig(BaseModel):
    """HTTP liveness probe for one compose service."""

    service: str
    port: int = Field(description="Container port, resolved to the host port via compose")
    paths: list[str] = Field(default_factory=lambda: ["/"], min_length=1)


def _default_probes() -> list[ProbeConfig]:
    return [
        ProbeConfig(service="frontend", port=3000, paths=["/"]),
        ProbeConfig(service="backend", port=5000, paths=["/health", "/"]),
    ]


class HealthConfig(BaseModel):
    """Post-deploy liveness checks."""

    host: str = "localhost"
    delay_seconds: float = Field(default=5, ge=0)
    timeout_seconds: float = Field(default=5, gt=0)
    probes: list[ProbeConfig] = Field(default_factory=_default_probes)


class DependenciesConfig(BaseModel):
    """System packages and the container runtime service."""

    packages: list[str] = Field(
        default_factory=lambda: ["docker.io", "docker-compose", "git", "cron"]
    )
    runtime_service: str = "docker"


class SchedulerConfig(BaseModel):
    """Crontab entry re-running the deploy."""

    schedule: str = "*/5 * * * *"
    service_names: list[str] = Field(default_factory=lambda: ["cron", "crond"])


class DeployConfig(BaseModel):
    """Root configuration for pizzaria-deploy."""

    log_file: Path = Path("/var/log/pizzaria-deploy.log")
    lock_file: Path = Path("/tmp/pizzaria-deploy.lock")
    docker_command: str = "docker"
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    compose: ComposeConfig = Field(default_factory=ComposeConfig)
    health: HealthConfig = Field(default_factory=HealthConfig)
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)

    # Set by load_config so the crontab entry can pass the same file back
    source: Path | None = Field(default=None, exclude=True)

    @property
    def manifest_path(self) -> Path:
        """Absolute path of the compose manifest inside the checkout."""
        return self.repository.path / self.compose.file


def load_config(config_path: Path | None) -> DeployConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml, or None for defaults

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    if config_path is None or not config_path.exists():
        return DeployConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        config = DeployConfig.model_validate(data)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
    config.source = config_path.resolve()
    return config


def write_config_template(config_path: Path) -> Path:
    """Write default config.toml template.

    Args:
        config_path: Destination file; parent directories are created

    Returns:
        Path to the written config file
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    template = DeployConfig().model_dump(mode="json")
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
