"""Repository synchronization for the deployed checkout."""

import logging

from ..config import DeployConfig
from ..errors import SyncError
from ..models import Revision, UpdateCheck
from ..services import git
from ..services.git import GitError

logger = logging.getLogger(__name__)


def _revision(sha: str | None) -> Revision | None:
    return Revision(sha=sha) if sha else None


class RepositorySynchronizer:
    """Clones or fast-forwards the checkout and detects upstream commits.

    Branches are tried in the configured order; the first one the remote
    accepts is used for the rest of the run.
    """

    def __init__(self, config: DeployConfig):
        self.config = config
        self.path = config.repository.path
        self.remote = config.repository.remote
        self.branches = config.repository.branches
        self.branch: str | None = None

    def checkout_exists(self) -> bool:
        return git.is_checkout(self.path)

    def _fetch(self) -> str:
        """Fetch the first branch the remote has and return its name."""
        errors = []
        for branch in self.branches:
            try:
                git.fetch(self.remote, branch, cwd=self.path)
            except GitError as e:
                errors.append(str(e))
                continue
            return branch
        raise SyncError(f"Failed to fetch from remote repository: {'; '.join(errors)}")

    def _remote_sha(self, fetched: str) -> str | None:
        refs = ["@{u}", f"{self.remote}/{fetched}"]
        refs += [f"{self.remote}/{b}" for b in self.branches if b != fetched]
        for ref in refs:
            sha = git.rev_parse(ref, cwd=self.path)
            if sha:
                return sha
        return None

    def check_for_update(self) -> UpdateCheck:
        """Fetch and compare HEAD with the remote tracking revision.

        Does not touch the working tree. A missing checkout always counts
        as an available update (initial install).

        Raises:
            SyncError: If every configured branch fails to fetch
        """
        if not self.checkout_exists():
            logger.info("No checkout at %s, initial setup required", self.path)
            return UpdateCheck(checkout_missing=True)

        self.branch = self._fetch()
        check = UpdateCheck(
            local=_revision(git.rev_parse("HEAD", cwd=self.path)),
            remote=_revision(self._remote_sha(self.branch)),
        )
        if check.available:
            logger.info(
                "Updates available. Local: %s, Remote: %s",
                check.local or "unknown",
                check.remote or "unknown",
            )
        else:
            logger.info("Repository is up to date")
        return check

    def has_update(self) -> bool:
        return self.check_for_update().available

    def synchronize(self) -> Revision:
        """Clone the repository or fast-forward the existing checkout.

        Returns:
            HEAD revision after synchronizing

        Raises:
            SyncError: If clone or pull fails
        """
        if not self.checkout_exists():
            logger.info("Cloning repository...")
            try:
                git.clone(self.config.repository.url, self.path)
            except (GitError, OSError) as e:
                raise SyncError(f"Failed to clone repository: {e}") from e
        else:
            logger.info("Updating repository...")
            self._pull()

        try:
            revision = Revision(sha=git.get_head_sha(self.path))
        except GitError as e:
            raise SyncError(f"Cannot read HEAD after update: {e}") from e
        logger.info("Repository updated to commit: %s", revision.short)
        return revision

    def _pull(self) -> None:
        branches = [self.branch] if self.branch else []
        branches += [b for b in self.branches if b != self.branch]
        errors = []
        for branch in branches:
            try:
                git.pull_ff_only(self.remote, branch, cwd=self.path)
            except GitError as e:
                errors.append(str(e))
                continue
            self.branch = branch
            return
        raise SyncError(f"Failed to pull latest changes: {'; '.join(errors)}")
