"""System dependency installation.

Installs the packages the deploy needs (Docker, the compose tool, Git,
cron) and makes sure the container runtime service is up. Every step is
idempotent, so repeated runs after a successful one change nothing.
"""

import logging
import os
import shutil

from ..config import DeployConfig
from ..errors import DependencyError, PrivilegeError
from ..services import packages, systemd
from ..services.packages import PackageError
from ..services.systemd import ServiceError

logger = logging.getLogger(__name__)


def required_executables(config: DeployConfig) -> list[str]:
    """Executables the pipeline cannot run without."""
    executables = [config.docker_command, config.compose.command[0], "git"]
    return list(dict.fromkeys(executables))


def dependencies_missing(config: DeployConfig) -> list[str]:
    """Return required executables not found on PATH."""
    return [exe for exe in required_executables(config) if shutil.which(exe) is None]


def is_root() -> bool:
    return os.geteuid() == 0


class DependencyInstaller:
    """Installs system packages and starts the container runtime."""

    def __init__(self, config: DeployConfig):
        self.config = config

    def missing(self) -> list[str]:
        return dependencies_missing(self.config)

    def install(self) -> None:
        """Install missing packages and start/enable the runtime service.

        Raises:
            PrivilegeError: If not running as root
            DependencyError: If any package or service step fails
        """
        if not is_root():
            raise PrivilegeError("Please run as root for initial setup to install dependencies")

        logger.info("Checking and installing system dependencies...")
        try:
            packages.update_index()
        except PackageError as e:
            raise DependencyError(f"Failed to update package lists: {e}") from e

        for package in self.config.dependencies.packages:
            try:
                if packages.is_installed(package):
                    logger.info("%s is already installed", package)
                    continue
                logger.info("Installing %s...", package)
                packages.install(package)
            except PackageError as e:
                raise DependencyError(f"Failed to install {package}: {e}") from e

        service = self.config.dependencies.runtime_service
        try:
            systemd.start(service)
        except ServiceError as e:
            raise DependencyError(f"Failed to start {service} service: {e}") from e
        try:
            systemd.enable(service)
        except ServiceError as e:
            raise DependencyError(f"Failed to enable {service} service: {e}") from e
