"""Status reporting for the deployed application.

Collection never raises: every query that fails is replaced by a
fallback value so a status report cannot abort a deploy run.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from ..config import DeployConfig
from ..constants import SHORT_SHA_LENGTH, STATS_MAX_LINES
from ..models import UNKNOWN, StatusReport
from ..services import compose as compose_service
from ..services import git
from ..services.compose import Compose, ComposeError
from ..services.git import GitError

logger = logging.getLogger(__name__)


def _git_field(query: Callable[[Path], str], config: DeployConfig) -> str:
    try:
        return query(config.repository.path) or UNKNOWN
    except GitError:
        return UNKNOWN


def collect_status(config: DeployConfig, compose: Compose | None = None) -> StatusReport:
    """Gather git, container and resource state.

    Args:
        config: Deploy configuration
        compose: Compose client (built from config if omitted)

    Returns:
        StatusReport with fallbacks for anything that could not be read
    """
    path = config.repository.path
    report = StatusReport(project_dir=path, present=path.is_dir())
    if not report.present:
        return report

    report.branch = _git_field(git.get_current_branch, config)
    head = _git_field(git.get_head_sha, config)
    report.commit = head[:SHORT_SHA_LENGTH] if head != UNKNOWN else UNKNOWN
    report.last_update = _git_field(git.get_last_commit_date, config)

    compose = compose or Compose(config.compose.command, config.manifest_path)
    try:
        report.containers = compose.ps()
    except ComposeError as e:
        logger.debug("compose ps failed: %s", e)
    if report.containers:
        report.urls = [
            f"http://localhost:{port}"
            for port in compose_service.published_ports(report.containers)
        ]

    try:
        report.resources = compose_service.stats_snapshot(
            config.docker_command, max_lines=STATS_MAX_LINES
        )
    except ComposeError as e:
        logger.debug("docker stats failed: %s", e)
    return report


def report_status(report: StatusReport) -> None:
    """Write a status report to the log."""
    logger.info("=== Pizzaria Application Status ===")
    if not report.present:
        logger.error("Project directory not found at %s", report.project_dir)
        logger.warning("Run this script to perform initial setup")
        return

    logger.info("Git Branch: %s", report.branch)
    logger.info("Current Commit: %s", report.commit)
    logger.info("Last Update: %s", report.last_update)

    logger.info("Docker Containers:")
    if report.containers is None:
        logger.error("No containers found or compose tool not available")
    else:
        for line in report.containers.splitlines():
            logger.info("%s", line)

    logger.info("Accessible URLs:")
    for url in report.urls:
        logger.info("%s", url)

    logger.info("Resource Usage:")
    if report.resources is None:
        logger.warning("Unable to get resource stats")
    else:
        for line in report.resources:
            logger.info("%s", line)


class StatusReporter:
    """Collects and logs status for a configuration."""

    def __init__(self, config: DeployConfig, compose: Compose | None = None):
        self.config = config
        self.compose = compose

    def collect(self) -> StatusReport:
        return collect_status(self.config, self.compose)

    def report(self) -> StatusReport:
        report = self.collect()
        report_status(report)
        return report
