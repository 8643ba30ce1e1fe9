"""Crontab registration of the deploy entry point."""

import logging
import shlex
from pathlib import Path

from ..config import DeployConfig
from ..errors import SchedulerError
from ..services import crontab, systemd
from ..services.crontab import CrontabError

logger = logging.getLogger(__name__)


def build_entry(schedule: str, script_path: Path, config_path: Path | None = None) -> str:
    """Crontab line running the deploy on schedule with output discarded."""
    command = shlex.quote(str(script_path))
    if config_path is not None:
        command += f" --config {shlex.quote(str(config_path))}"
    return f"{schedule} {command} > /dev/null 2>&1"


class SchedulerInstaller:
    """Keeps exactly one crontab entry for the deploy script.

    The entry is keyed by the script's absolute path, so reinstalling never
    duplicates it.
    """

    def __init__(self, config: DeployConfig, script_path: Path):
        self.config = config
        self.script_path = script_path.resolve()

    def install(self) -> bool:
        """Ensure the crontab entry exists and the cron service runs.

        Returns:
            True if the entry was added, False if it was already present

        Raises:
            SchedulerError: If the crontab cannot be read or written
        """
        key = str(self.script_path)
        try:
            current = crontab.read_crontab()
            if crontab.has_entry(current, key):
                logger.info("Cron job already exists for this script")
                added = False
            else:
                logger.info("Setting up cron job (%s)...", self.config.scheduler.schedule)
                entry = build_entry(
                    self.config.scheduler.schedule, self.script_path, self.config.source
                )
                crontab.write_crontab(crontab.add_entry(current, entry, key))
                logger.info("Cron job installed successfully")
                added = True
        except CrontabError as e:
            raise SchedulerError(f"Failed to install cron job: {e}") from e

        self._ensure_service()
        return added

    def _ensure_service(self) -> None:
        names = self.config.scheduler.service_names
        for action in ("enable", "start"):
            if systemd.first_successful(action, names) is None:
                logger.warning("Could not %s cron service (tried %s)", action, ", ".join(names))
