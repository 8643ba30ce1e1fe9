"""Repository revision models."""

from pydantic import BaseModel, ConfigDict, Field

from ..constants import SHORT_SHA_LENGTH


class Revision(BaseModel):
    """A commit in the deployed repository, compared by SHA."""

    model_config = ConfigDict(frozen=True)

    sha: str = Field(min_length=1, description="Full commit SHA")

    @property
    def short(self) -> str:
        return self.sha[:SHORT_SHA_LENGTH]

    def __str__(self) -> str:
        return self.short


class UpdateCheck(BaseModel):
    """Outcome of comparing the local checkout with its remote.

    Attributes:
        local: HEAD of the checkout, None if unknown.
        remote: Remote tracking revision after fetch, None if unknown.
        checkout_missing: True when there is no checkout yet.
    """

    local: Revision | None = None
    remote: Revision | None = None
    checkout_missing: bool = False

    @property
    def available(self) -> bool:
        """True when a synchronize and redeploy is needed."""
        return self.checkout_missing or self.local != self.remote
