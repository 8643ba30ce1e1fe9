"""Status report model."""

from pathlib import Path

from pydantic import BaseModel, Field

UNKNOWN = "unknown"


class StatusReport(BaseModel):
    """Point-in-time view of the checkout and its containers.

    Git fields fall back to "unknown"; container and resource fields are
    None when the compose tool or docker could not be queried.

    Attributes:
        project_dir: Checkout directory.
        present: Whether the checkout exists.
        branch: Current branch name.
        commit: Short HEAD SHA.
        last_update: Date of the last commit (YYYY-MM-DD).
        containers: Raw `compose ps` output.
        urls: Access URLs built from published host ports.
        resources: `docker stats` table lines.
    """

    project_dir: Path
    present: bool = False
    branch: str = UNKNOWN
    commit: str = UNKNOWN
    last_update: str = UNKNOWN
    containers: str | None = None
    urls: list[str] = Field(default_factory=list)
    resources: list[str] | None = None
