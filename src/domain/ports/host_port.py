from abc import ABC, abstractmethod

from src.domain.value_objects.commit_status import CommitState, CommitStatus
from src.domain.value_objects.permission import PermissionLevel
from src.domain.value_objects.pull_request import PullRequestInfo, Review


class HostQueryError(RuntimeError):
    """Raised when a call to the CI/VCS host fails (network, auth, bad response)."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")


class HostPort(ABC):
    """Port for the CI/VCS host (GitHub or Gitea)."""

    @abstractmethod
    async def get_permission(self, user: str) -> PermissionLevel:
        """Repository permission of a user."""

    @abstractmethod
    async def get_pull_request(self, number: int) -> PullRequestInfo:
        """Current head SHA, base ref and draft flag of a pull request."""

    @abstractmethod
    async def list_reviews(self, number: int) -> list[Review]:
        """All reviews submitted on a pull request."""

    @abstractmethod
    async def list_commit_statuses(self, sha: str) -> list[CommitStatus]:
        """Every status entry recorded for a commit, in host order."""

    @abstractmethod
    async def set_commit_status(
        self,
        sha: str,
        context: str,
        state: CommitState,
        description: str,
    ) -> None:
        """Append a status entry for a commit."""

    @abstractmethod
    async def post_comment(self, number: int, body: str) -> None:
        """Post a comment on a pull request."""
