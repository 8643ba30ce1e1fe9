"""Git operations for the deployed checkout."""

from pathlib import Path

from ..constants import GIT_QUERY_TIMEOUT
from .process import CommandError, run_command


class GitError(CommandError):
    """Git command failed."""


def run_git(
    *args: str,
    cwd: Path | None = None,
    check: bool = True,
    timeout: float | None = GIT_QUERY_TIMEOUT,
) -> str:
    """Run git command and return stripped stdout.

    Args:
        *args: Git arguments
        cwd: Working directory
        check: Raise GitError on non-zero exit
        timeout: Timeout in seconds (None waits forever)

    Returns:
        Stripped stdout

    Raises:
        GitError: If git is missing, times out, or fails with check=True
    """
    result = run_command(
        ["git", *args],
        cwd=cwd,
        timeout=timeout,
        check=check,
        error_class=GitError,
    )
    return result.stdout.strip()


def is_checkout(path: Path) -> bool:
    """Return True if path is the root of a git working tree."""
    return (path / ".git").exists()


def clone(url: str, dest: Path) -> None:
    """Clone url into dest, creating parent directories."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    run_git("clone", url, str(dest), timeout=None)


def fetch(remote: str, branch: str, cwd: Path) -> None:
    """Fetch a single branch from remote."""
    run_git("fetch", remote, branch, cwd=cwd, timeout=None)


def pull_ff_only(remote: str, branch: str, cwd: Path) -> None:
    """Fast-forward the checkout to remote/branch."""
    run_git("pull", "--ff-only", remote, branch, cwd=cwd, timeout=None)


def rev_parse(ref: str, cwd: Path) -> str | None:
    """Resolve ref to a full SHA, or None if it does not resolve."""
    try:
        sha = run_git("rev-parse", "--verify", "--quiet", ref, cwd=cwd, check=True)
    except GitError:
        return None
    return sha or None


def get_head_sha(cwd: Path) -> str:
    """Get full HEAD commit SHA."""
    return run_git("rev-parse", "HEAD", cwd=cwd)


def get_current_branch(cwd: Path) -> str:
    """Get current branch name (empty when detached)."""
    return run_git("branch", "--show-current", cwd=cwd)


def get_last_commit_date(cwd: Path) -> str:
    """Get committer date of HEAD as YYYY-MM-DD."""
    return run_git("log", "-1", "--format=%cd", "--date=short", cwd=cwd)
