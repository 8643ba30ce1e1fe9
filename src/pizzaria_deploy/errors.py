"""Deployment errors.

Everything derived from DeployError is fatal: the orchestrator logs it,
releases the lock and exits with status 1.
"""


class DeployError(Exception):
    """Base exception for fatal deployment errors."""


class ConfigError(DeployError):
    """Raised when the configuration file cannot be loaded."""


class PrivilegeError(DeployError):
    """Raised when an operation needs root and we don't have it."""


class DependencyError(DeployError):
    """Raised when system packages or services cannot be set up."""


class SyncError(DeployError):
    """Raised when cloning, fetching or pulling the repository fails."""


class DeploymentError(DeployError):
    """Raised when containers cannot be rebuilt or started."""


class SchedulerError(DeployError):
    """Raised when the crontab entry cannot be installed."""
