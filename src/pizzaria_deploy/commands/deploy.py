"""Deploy command implementation."""

import signal
from types import FrameType

from ..config import DeployConfig
from ..core import AutoDeployer


def _handle_terminate(signum: int, frame: FrameType | None) -> None:
    """Turn SIGTERM into SystemExit so finally blocks release the lock."""
    raise SystemExit(128 + signum)


def run_deploy(config: DeployConfig, force: bool = False) -> int:
    """Run one deploy cycle and return its exit code."""
    original_handler = signal.signal(signal.SIGTERM, _handle_terminate)
    try:
        return AutoDeployer(config).run(force=force)
    finally:
        signal.signal(signal.SIGTERM, original_handler)
