"""systemd service control."""

from ..constants import SYSTEMCTL_TIMEOUT
from .process import CommandError, run_command


class ServiceError(CommandError):
    """systemctl command failed."""


def systemctl(action: str, service: str) -> None:
    """Run `systemctl <action> <service>`.

    Raises:
        ServiceError: If systemctl is missing or the action fails
    """
    run_command(
        ["systemctl", action, service],
        timeout=SYSTEMCTL_TIMEOUT,
        error_class=ServiceError,
    )


def start(service: str) -> None:
    systemctl("start", service)


def enable(service: str) -> None:
    systemctl("enable", service)


def first_successful(action: str, names: list[str]) -> str | None:
    """Apply action to the first service name that accepts it.

    Returns:
        The name that succeeded, or None if every name failed
    """
    for name in names:
        try:
            systemctl(action, name)
        except ServiceError:
            continue
        return name
    return None
