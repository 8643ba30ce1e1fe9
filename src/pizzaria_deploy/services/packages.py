"""Debian package management (apt-get/dpkg)."""

from .process import CommandError, run_command

_INSTALLED_STATUS = "Status: install ok installed"


class PackageError(CommandError):
    """Package query or installation failed."""


def is_installed(package: str) -> bool:
    """Return True if dpkg reports package as installed."""
    result = run_command(["dpkg", "-s", package], check=False, error_class=PackageError)
    return result.returncode == 0 and _INSTALLED_STATUS in result.stdout


def update_index() -> None:
    """Refresh the apt package lists."""
    run_command(["apt-get", "update", "-qq"], error_class=PackageError)


def install(package: str) -> None:
    """Install a package non-interactively."""
    run_command(["apt-get", "install", "-y", package], error_class=PackageError)
