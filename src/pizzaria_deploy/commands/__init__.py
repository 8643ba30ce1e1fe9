"""CLI command implementations for pizzaria-deploy.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .deploy import run_deploy
from .init import init
from .status import show_status

__all__ = [
    "init",
    "run_deploy",
    "show_status",
]
