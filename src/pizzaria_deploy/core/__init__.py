"""Core deploy pipeline for pizzaria-deploy.

This package contains the components run by the orchestrator:
- lock_manager: PID-file mutual exclusion between runs
- dependencies: system package and runtime service setup
- repository: clone/fetch/fast-forward and update detection
- deployment: compose rebuild, restart and liveness probing
- scheduler: idempotent crontab entry
- status: read-only status report
- orchestrator: the deploy state machine
"""

from .dependencies import DependencyInstaller, dependencies_missing
from .deployment import DeploymentExecutor
from .lock_manager import (
    LockError,
    LockHeldError,
    acquire_lock,
    get_current_lock,
    hold_lock,
    release_lock,
)
from .orchestrator import AutoDeployer
from .repository import RepositorySynchronizer
from .scheduler import SchedulerInstaller, build_entry
from .status import StatusReporter, collect_status, report_status

__all__ = [
    "AutoDeployer",
    "DependencyInstaller",
    "DeploymentExecutor",
    "LockError",
    "LockHeldError",
    "RepositorySynchronizer",
    "SchedulerInstaller",
    "StatusReporter",
    "acquire_lock",
    "build_entry",
    "collect_status",
    "dependencies_missing",
    "get_current_lock",
    "hold_lock",
    "release_lock",
    "report_status",
]
