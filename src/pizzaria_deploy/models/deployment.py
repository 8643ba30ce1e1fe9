"""Deployment outcome models.

Probe results are advisory: a deployment succeeds whenever at least one
container is running, whatever the probes say.
"""

from pydantic import BaseModel, Field


class ProbeResult(BaseModel):
    """Result of an HTTP liveness probe against one service."""

    service: str = Field(description="Compose service name")
    url: str | None = Field(default=None, description="URL that was probed last")
    ok: bool = Field(default=False, description="True if any probed path answered")
    detail: str = Field(default="", description="Human-readable outcome")


class DeploymentResult(BaseModel):
    """Result of a rebuild and restart."""

    running: int = Field(description="Containers running after start")
    exposed: list[str] = Field(
        default_factory=list, description="ps lines publishing watched ports"
    )
    probes: list[ProbeResult] = Field(default_factory=list)

    @property
    def healthy(self) -> bool:
        """True if every liveness probe succeeded."""
        return all(p.ok for p in self.probes)
