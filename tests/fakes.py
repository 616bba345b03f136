"""Test doubles shared across the suite."""

from datetime import UTC, datetime, timedelta
from typing import Any

from src.domain.entities.check_registry import CheckRegistry, compile_registry
from src.domain.ports.host_port import HostPort, HostQueryError
from src.domain.value_objects.commit_status import CommitState, CommitStatus
from src.domain.value_objects.permission import PermissionLevel
from src.domain.value_objects.pull_request import PullRequestInfo, Review, ReviewState

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


class FakeHost(HostPort):
    """In-memory host: statuses are an append-only log, like the real API."""

    def __init__(self) -> None:
        self.permissions: dict[str, PermissionLevel] = {}
        self.pull_requests: dict[int, PullRequestInfo] = {}
        self.reviews: dict[int, list[Review]] = {}
        self.statuses: dict[str, list[CommitStatus]] = {}
        self.comments: list[tuple[int, str]] = []
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self._clock = 0

    async def __aenter__(self) -> "FakeHost":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise HostQueryError(operation, "simulated outage")

    def add_status(self, sha: str, context: str, state: CommitState, description: str = "") -> None:
        self._clock += 1
        self.statuses.setdefault(sha, []).append(
            CommitStatus(
                context=context,
                state=state,
                description=description,
                updated_at=BASE_TIME + timedelta(seconds=self._clock),
            )
        )

    def approve(self, pr_number: int, login: str) -> None:
        self.reviews.setdefault(pr_number, []).append(
            Review(state=ReviewState.APPROVED, approver_login=login)
        )

    def dismiss(self, pr_number: int, login: str) -> None:
        self.reviews[pr_number] = [
            Review(state=ReviewState.DISMISSED, approver_login=r.approver_login)
            if r.approver_login == login
            else r
            for r in self.reviews.get(pr_number, [])
        ]

    async def get_permission(self, user: str) -> PermissionLevel:
        self._record("get_permission")
        return self.permissions.get(user, PermissionLevel.NONE)

    async def get_pull_request(self, number: int) -> PullRequestInfo:
        self._record("get_pull_request")
        if number not in self.pull_requests:
            raise HostQueryError("get_pull_request", "HTTP 404")
        return self.pull_requests[number]

    async def list_reviews(self, number: int) -> list[Review]:
        self._record("list_reviews")
        return list(self.reviews.get(number, []))

    async def list_commit_statuses(self, sha: str) -> list[CommitStatus]:
        self._record("list_commit_statuses")
        return list(self.statuses.get(sha, []))

    async def set_commit_status(
        self, sha: str, context: str, state: CommitState, description: str
    ) -> None:
        self._record("set_commit_status")
        self.add_status(sha, context, state, description)

    async def post_comment(self, number: int, body: str) -> None:
        self._record("post_comment")
        self.comments.append((number, body))


def make_registry(**overrides: Any) -> CheckRegistry:
    raw: dict[str, Any] = {
        "checks": [
            {
                "name": "unit",
                "trigger": "/test",
                "type": "pr-test",
                "command": "npm test",
                "mustRun": True,
                "mustPass": True,
            },
            {
                "name": "ai-review",
                "trigger": "/review",
                "type": "pr-review",
                "provider": "bedrock",
                "model": "nova-micro",
                "apiKeySecret": "BEDROCK_API_KEY",
                "mustRun": True,
                "mustPass": False,
            },
        ],
    }
    raw.update(overrides)
    return compile_registry(raw)
