"""Pydantic data models for pizzaria-deploy.

This package defines the data structures shared by the deploy pipeline:
- Deploy lock file contents (Lock)
- Repository revisions and update checks (Revision, UpdateCheck)
- Deployment and probe outcomes (DeploymentResult, ProbeResult)
- Status snapshots (StatusReport)
"""

from .deployment import DeploymentResult, ProbeResult
from .lock import Lock
from .revision import Revision, UpdateCheck
from .status import UNKNOWN, StatusReport

__all__ = [
    "UNKNOWN",
    "DeploymentResult",
    "Lock",
    "ProbeResult",
    "Revision",
    "StatusReport",
    "UpdateCheck",
]
