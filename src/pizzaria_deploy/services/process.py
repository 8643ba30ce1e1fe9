"""Subprocess execution shared by the external tool wrappers."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """External command could not be run or exited non-zero."""


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: float | None = None,
    input_text: str | None = None,
    check: bool = True,
    error_class: type[CommandError] = CommandError,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    Args:
        cmd: Command and arguments
        cwd: Working directory
        timeout: Optional timeout in seconds (None waits forever)
        input_text: Text written to the command's stdin
        check: Raise on non-zero exit code
        error_class: CommandError subclass raised on failure

    Returns:
        Completed process with text stdout/stderr

    Raises:
        CommandError: (or error_class) if the executable is missing, the
            command times out, or it exits non-zero with check=True
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=input_text,
        )
    except subprocess.TimeoutExpired as e:
        raise error_class(f"{cmd[0]} timed out after {timeout} seconds") from e
    except FileNotFoundError:
        raise error_class(f"Executable not found: {cmd[0]}") from None

    if check and result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip()
        raise error_class(f"{' '.join(cmd[:2])} failed: {detail}")
    return result
