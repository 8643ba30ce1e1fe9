"""User crontab access and idempotent entry editing."""

from ..constants import CRONTAB_TIMEOUT
from .process import CommandError, run_command


class CrontabError(CommandError):
    """crontab could not be read or written."""


def read_crontab() -> str:
    """Return the current user's crontab, or "" if there is none.

    Raises:
        CrontabError: If the crontab executable is missing or times out
    """
    result = run_command(
        ["crontab", "-l"], timeout=CRONTAB_TIMEOUT, check=False, error_class=CrontabError
    )
    # Exit status 1 with "no crontab for <user>" just means empty
    if result.returncode != 0:
        return ""
    return result.stdout


def write_crontab(content: str) -> None:
    """Replace the current user's crontab with content."""
    run_command(
        ["crontab", "-"],
        timeout=CRONTAB_TIMEOUT,
        input_text=content,
        error_class=CrontabError,
    )


def has_entry(content: str, key: str) -> bool:
    """Return True if any active line of the crontab mentions key."""
    return any(
        key in line for line in content.splitlines() if not line.lstrip().startswith("#")
    )


def add_entry(content: str, entry: str, key: str) -> str:
    """Return content with entry appended unless a line already mentions key."""
    if has_entry(content, key):
        return content
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{content}{entry}\n"
