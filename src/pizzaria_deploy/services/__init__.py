"""External tool integrations for pizzaria-deploy.

This package wraps the command-line tools the deploy pipeline drives:
- process: shared subprocess runner and CommandError
- git: clone/fetch/pull/rev-parse of the checkout
- compose: docker-compose and docker queries
- packages: apt-get/dpkg
- systemd: systemctl
- crontab: crontab read/write and entry editing
- http: liveness probes
"""

from .compose import Compose, ComposeError, published_ports
from .crontab import CrontabError, add_entry, has_entry, read_crontab, write_crontab
from .git import GitError, run_git
from .http import probe
from .packages import PackageError
from .process import CommandError, run_command
from .systemd import ServiceError

__all__ = [
    "CommandError",
    "Compose",
    "ComposeError",
    "CrontabError",
    "GitError",
    "PackageError",
    "ServiceError",
    "add_entry",
    "has_entry",
    "probe",
    "published_ports",
    "read_crontab",
    "run_command",
    "run_git",
    "write_crontab",
]
