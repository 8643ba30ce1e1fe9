"""Container rebuild and restart via the compose tool."""

import logging
import time
from collections.abc import Callable

from ..config import DeployConfig, ProbeConfig
from ..errors import DeploymentError
from ..models import DeploymentResult, ProbeResult
from ..services import compose as compose_service
from ..services import http
from ..services.compose import Compose, ComposeError

logger = logging.getLogger(__name__)


class DeploymentExecutor:
    """Tears down, rebuilds and restarts the application containers.

    Sequence: stop existing containers, optionally prune old images, build
    without cache, start detached, wait for the settle period, require at
    least one running container, then probe HTTP endpoints. Probe failures
    are logged as warnings and never fail the deployment.
    """

    def __init__(
        self,
        config: DeployConfig,
        compose: Compose | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.compose = compose or Compose(config.compose.command, config.manifest_path)
        self.sleep = sleep

    def running_count(self) -> int:
        """Number of project containers, 0 if the compose tool cannot tell."""
        try:
            return len(self.compose.container_ids())
        except ComposeError as e:
            logger.debug("Cannot list containers: %s", e)
            return 0

    def deploy(self) -> DeploymentResult:
        """Rebuild and restart the application.

        Returns:
            Running container count, exposed service lines and probe results

        Raises:
            DeploymentError: If the manifest is missing, build or start
                fails, or no container is running afterwards
        """
        logger.info("Deploying pizzaria application...")
        manifest = self.config.manifest_path
        if not manifest.is_file():
            raise DeploymentError(f"{manifest.name} not found in {manifest.parent}")

        self._stop()
        if self.config.compose.prune:
            self._prune()

        logger.info("Building and starting containers (forced rebuild)...")
        try:
            self.compose.build()
        except ComposeError as e:
            raise DeploymentError(f"Failed to build containers: {e}") from e
        try:
            self.compose.up()
        except ComposeError as e:
            raise DeploymentError(f"Failed to start containers: {e}") from e

        logger.info("Waiting for containers to start...")
        self.sleep(self.config.compose.settle_seconds)
        running = self.running_count()
        if running == 0:
            raise DeploymentError("No containers are running after deployment")
        logger.info("Successfully deployed %d container(s)", running)

        exposed = self._log_containers()

        self.sleep(self.config.health.delay_seconds)
        probes = [self._probe(target) for target in self.config.health.probes]
        return DeploymentResult(running=running, exposed=exposed, probes=probes)

    def _stop(self) -> None:
        if not self.compose.is_available():
            return
        logger.info("Stopping existing containers...")
        try:
            self.compose.down()
        except ComposeError as e:
            logger.warning("No containers to stop (%s)", e)

    def _prune(self) -> None:
        logger.info("Removing old images to force rebuild...")
        try:
            self.compose.down(remove_images=True)
        except ComposeError as e:
            logger.debug("Image removal skipped: %s", e)
        try:
            compose_service.prune_system(self.config.docker_command)
        except ComposeError as e:
            logger.debug("docker system prune skipped: %s", e)

    def _log_containers(self) -> list[str]:
        try:
            table = self.compose.ps()
        except ComposeError as e:
            logger.warning("Cannot show container status: %s", e)
            return []
        for line in table.splitlines():
            logger.info("%s", line)

        logger.info("Checking exposed ports...")
        exposed = compose_service.lines_publishing(table, self.config.compose.exposed_ports)
        for line in exposed:
            logger.info("Service accessible: %s", line)
        return exposed

    def _probe(self, target: ProbeConfig) -> ProbeResult:
        host_port = self.compose.port(target.service, target.port)
        if host_port is None:
            return ProbeResult(service=target.service, detail="port not published")

        health = self.config.health
        url = None
        for path in target.paths:
            url = f"http://{health.host}:{host_port}{path}"
            if http.probe(url, timeout=health.timeout_seconds):
                logger.info("%s is responding on port %d", target.service, host_port)
                return ProbeResult(service=target.service, url=url, ok=True, detail="responding")

        logger.warning("%s may still be starting on port %d", target.service, host_port)
        return ProbeResult(service=target.service, url=url, detail="not responding")
