"""Lock model for concurrent deploy prevention.

Implements PID-based file locking so that only one deploy run touches
the checkout and the containers at a time.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Lock(BaseModel):
    """Active deploy lock written to the lock file.

    Attributes:
        pid: Process ID of the lock holder.
        command: Command that acquired the lock.
        started_at: When the lock was acquired.
    """

    pid: int = Field(description="Process ID holding the lock")
    command: str = Field(default="deploy", description="Command that acquired lock")
    started_at: datetime = Field(default_factory=datetime.now)
