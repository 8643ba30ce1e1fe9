"""Deploy orchestration.

Runs the pipeline under the deploy lock:

    lock -> dependencies (if missing) -> update check -> synchronize/deploy
         -> crontab entry -> status report

A forced run skips the update check and always synchronizes and
redeploys. Fatal errors end the run with exit code 1; a run that finds
another deploy in progress exits 0 without touching anything.
"""

import logging
import sys
from pathlib import Path

from ..config import DeployConfig
from ..errors import DeployError
from .dependencies import DependencyInstaller
from .deployment import DeploymentExecutor
from .lock_manager import LockError, LockHeldError, hold_lock
from .repository import RepositorySynchronizer
from .scheduler import SchedulerInstaller
from .status import StatusReporter

logger = logging.getLogger(__name__)

BANNER = "=" * 40


class AutoDeployer:
    """Entry point tying the deploy components together.

    Collaborators default to the real implementations built from config
    and can be replaced (tests pass fakes).
    """

    def __init__(
        self,
        config: DeployConfig,
        installer: DependencyInstaller | None = None,
        repository: RepositorySynchronizer | None = None,
        executor: DeploymentExecutor | None = None,
        scheduler: SchedulerInstaller | None = None,
        reporter: StatusReporter | None = None,
        script_path: Path | None = None,
    ):
        self.config = config
        self.installer = installer or DependencyInstaller(config)
        self.repository = repository or RepositorySynchronizer(config)
        self.executor = executor or DeploymentExecutor(config)
        self.scheduler = scheduler or SchedulerInstaller(
            config, script_path or Path(sys.argv[0])
        )
        self.reporter = reporter or StatusReporter(config)

    def run(self, force: bool = False) -> int:
        """Run one deploy cycle.

        Args:
            force: Synchronize and redeploy even if nothing changed upstream

        Returns:
            Process exit code (0 success or nothing to do, 1 fatal error)
        """
        logger.info(BANNER)
        if force:
            logger.info("FORCED Pizzaria Deploy (skipping update check)")
        else:
            logger.info("Starting Pizzaria Auto-Deploy System")
        logger.info("Repository: %s", self.config.repository.url)
        logger.info(BANNER)

        command = "deploy --force" if force else "deploy"
        try:
            with hold_lock(self.config.lock_file, command):
                self._run_locked(force)
        except LockHeldError as e:
            logger.warning("%s. Exiting.", e)
            return 0
        except (DeployError, LockError) as e:
            logger.error("ERROR: %s", e)
            return 1

        logger.info(BANNER)
        if force:
            logger.info("FORCED deployment completed!")
        else:
            logger.info("Pizzaria Auto-Deploy completed successfully!")
        logger.info("System will auto-update on schedule: %s", self.config.scheduler.schedule)
        logger.info(BANNER)
        return 0

    def _run_locked(self, force: bool) -> None:
        missing = self.installer.missing()
        if missing:
            logger.info("Missing executables: %s", ", ".join(missing))
            self.installer.install()

        if force:
            self._sync_and_deploy()
        else:
            self._deploy_if_needed()

        self.scheduler.install()
        self.reporter.report()

    def _sync_and_deploy(self) -> None:
        self.repository.synchronize()
        result = self.executor.deploy()
        if not result.healthy:
            logger.warning("Deployment is up but not every service responds yet")

    def _deploy_if_needed(self) -> None:
        check = self.repository.check_for_update()
        if check.available:
            self._sync_and_deploy()
            logger.info("Application updated successfully!")
            return

        if self.executor.running_count() == 0:
            logger.warning("No containers running. Starting application...")
            result = self.executor.deploy()
            if not result.healthy:
                logger.warning("Deployment is up but not every service responds yet")
        else:
            logger.info("Application is running and up to date")
