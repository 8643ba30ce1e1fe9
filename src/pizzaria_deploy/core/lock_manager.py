"""Lock manager for deploy concurrency control.

Provides PID-based file locking so that a cron-triggered run never overlaps
one that is still rebuilding containers. Includes stale lock detection for
crash recovery.

Uses atomic file creation (O_CREAT | O_EXCL) to prevent TOCTOU races.
"""

import contextlib
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from ..models import Lock

MAX_LOCK_RETRIES = 3  # Max retries when clearing stale locks

logger = logging.getLogger(__name__)


class LockError(Exception):
    """Error acquiring or managing lock."""


class LockHeldError(LockError):
    """Another live process holds the lock."""

    def __init__(self, lock: Lock):
        super().__init__(f"Deploy already running (PID {lock.pid}, command: {lock.command})")
        self.lock = lock


def _is_pid_running(pid: int) -> bool:
    """Check if a process with given PID is running."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)  # Signal 0 doesn't kill, just checks
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but belongs to another user
        return True
    except (OSError, OverflowError):
        # OverflowError: PID beyond the platform pid_t range
        return False
    return True


def get_current_lock(lock_path: Path) -> Lock | None:
    """Get current lock if it exists and can be parsed.

    A file holding only a PID (as older deploy scripts wrote it) is
    accepted as well.

    Args:
        lock_path: Path to the lock file

    Returns:
        Lock if a readable lock exists, None if the file is missing or garbled
    """
    try:
        content = lock_path.read_text().strip()
    except (FileNotFoundError, IsADirectoryError, UnicodeDecodeError):
        return None

    if content.isdigit():
        try:
            return Lock(pid=int(content), command="unknown")
        except ValueError:
            return None
    try:
        return Lock.model_validate_json(content)
    except ValidationError:
        return None


def is_stale_lock(lock: Lock) -> bool:
    """Check if lock is stale (owning process is gone)."""
    return not _is_pid_running(lock.pid)


def _try_atomic_create(lock_path: Path, lock: Lock) -> bool:
    """Attempt atomic lock file creation.

    Uses O_CREAT | O_EXCL flags for atomicity - if file exists,
    open() fails immediately rather than overwriting.

    Returns:
        True if lock was created, False if file already exists
    """
    try:
        fd = os.open(str(lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
    except FileExistsError:
        return False
    try:
        os.write(fd, lock.model_dump_json(indent=2).encode())
    finally:
        os.close(fd)
    return True


def acquire_lock(lock_path: Path, command: str = "deploy") -> Lock:
    """Acquire the deploy lock without blocking.

    Args:
        lock_path: Path to the lock file
        command: Command acquiring the lock

    Returns:
        Lock object if acquired

    Raises:
        LockHeldError: If another live process holds the lock
        LockError: If the lock file cannot be written or removed, or could
            not be created after clearing stale locks
    """
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LockError(f"Cannot create lock directory {lock_path.parent}: {e}") from e
    lock = Lock(pid=os.getpid(), command=command)

    for _ in range(MAX_LOCK_RETRIES):
        try:
            created = _try_atomic_create(lock_path, lock)
        except OSError as e:
            raise LockError(f"Cannot create lock file {lock_path}: {e}") from e
        if created:
            return lock

        existing = get_current_lock(lock_path)
        if existing is not None and existing.pid == os.getpid():
            # We already own the lock - update it
            try:
                lock_path.write_text(lock.model_dump_json(indent=2))
            except OSError as e:
                raise LockError(f"Cannot update lock file {lock_path}: {e}") from e
            return lock

        if existing is not None and not is_stale_lock(existing):
            raise LockHeldError(existing)

        # Dead owner or unreadable file
        if existing is None:
            logger.warning("Removing unreadable lock file %s", lock_path)
        else:
            logger.warning("Removing stale lock file (PID %d)", existing.pid)
        try:
            lock_path.unlink(missing_ok=True)
        except OSError as e:
            raise LockError(f"Cannot remove stale lock file {lock_path}: {e}") from e

    raise LockError("Failed to acquire lock after multiple attempts")


def release_lock(lock_path: Path) -> None:
    """Release lock if owned by current process.

    Args:
        lock_path: Path to the lock file
    """
    existing = get_current_lock(lock_path)
    if existing and existing.pid == os.getpid():
        lock_path.unlink(missing_ok=True)


@contextlib.contextmanager
def hold_lock(lock_path: Path, command: str = "deploy") -> Iterator[Lock]:
    """Hold the deploy lock for the duration of a with block.

    The lock is released however the block exits, including
    KeyboardInterrupt and SystemExit raised from signal handlers.
    Nothing is released when acquisition itself fails.
    """
    lock = acquire_lock(lock_path, command)
    try:
        yield lock
    finally:
        release_lock(lock_path)
