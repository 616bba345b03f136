"""HostPort over the GitHub / Gitea REST API.

Both hosts serve the same `/repos/{owner}/{repo}/...` routes used here.
Failures are not retried: every transport error or non-2xx response is
raised as HostQueryError for the caller to decide on.
"""

from datetime import UTC, datetime
from types import TracebackType
from typing import Any

import httpx
from loguru import logger

from src.domain.ports.host_port import HostPort, HostQueryError
from src.domain.value_objects.commit_status import CommitState, CommitStatus
from src.domain.value_objects.permission import PermissionLevel
from src.domain.value_objects.pull_request import PullRequestInfo, Review, ReviewState
from src.infrastructure.host.host_settings import HostSettings

PAGE_SIZE = 100
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _parse_time(value: Any) -> datetime:
    if not value:
        return _EPOCH
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _parse_state(value: Any) -> CommitState:
    try:
        return CommitState(str(value).lower())
    except ValueError:
        # Gitea also reports "warning"; anything unknown counts as a finished non-success.
        return CommitState.ERROR


def parse_commit_status(item: dict[str, Any]) -> CommitStatus:
    # Gitea names the field `status`, GitHub `state`.
    state = item.get("state") or item.get("status")
    return CommitStatus(
        context=item.get("context", ""),
        state=_parse_state(state),
        description=item.get("description") or "",
        updated_at=_parse_time(item.get("updated_at") or item.get("created_at")),
    )


class RestHostAdapter(HostPort):
    def __init__(self, settings: HostSettings, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._client = client or httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.timeout_s,
        )
        self._headers = {
            "Authorization": f"token {settings.token}",
            "Accept": "application/json",
        }

    async def __aenter__(self) -> "RestHostAdapter":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _repo_path(self, suffix: str) -> str:
        return f"/repos/{self.settings.repository}{suffix}"

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("{} {} -> HTTP {}", method, path, e.response.status_code)
            raise HostQueryError(operation, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("{} {} failed: {}", method, path, e)
            raise HostQueryError(operation, str(e) or type(e).__name__) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise HostQueryError(operation, "response is not JSON") from e

    async def _get_all(self, operation: str, path: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = await self._request(
                operation, "GET", path, params={"per_page": PAGE_SIZE, "limit": PAGE_SIZE, "page": page}
            )
            if not isinstance(batch, list):
                raise HostQueryError(operation, "expected a list response")
            # Gitea may cap the page below PAGE_SIZE, so only an empty page ends the listing.
            if not batch:
                return items
            items.extend(batch)
            page += 1

    async def get_permission(self, user: str) -> PermissionLevel:
        data = await self._request(
            "get_permission", "GET", self._repo_path(f"/collaborators/{user}/permission")
        )
        if not isinstance(data, dict) or not data.get("permission"):
            raise HostQueryError("get_permission", f"no permission reported for {user}")
        return PermissionLevel.parse(data["permission"])

    async def get_pull_request(self, number: int) -> PullRequestInfo:
        data = await self._request("get_pull_request", "GET", self._repo_path(f"/pulls/{number}"))
        if not isinstance(data, dict):
            raise HostQueryError("get_pull_request", "expected an object response")
        head = data.get("head") or {}
        base = data.get("base") or {}
        return PullRequestInfo(
            number=number,
            head_sha=head.get("sha") or "",
            head_ref=head.get("ref") or "",
            base_ref=base.get("ref") or "",
            is_draft=bool(data.get("draft", False)),
        )

    async def list_reviews(self, number: int) -> list[Review]:
        items = await self._get_all("list_reviews", self._repo_path(f"/pulls/{number}/reviews"))
        return [
            Review(
                state=ReviewState.parse(item.get("state")),
                approver_login=(item.get("user") or {}).get("login", ""),
            )
            for item in items
        ]

    async def list_commit_statuses(self, sha: str) -> list[CommitStatus]:
        items = await self._get_all("list_commit_statuses", self._repo_path(f"/commits/{sha}/statuses"))
        return [parse_commit_status(item) for item in items]

    async def set_commit_status(
        self,
        sha: str,
        context: str,
        state: CommitState,
        description: str,
    ) -> None:
        await self._request(
            "set_commit_status",
            "POST",
            self._repo_path(f"/statuses/{sha}"),
            json={"state": state.value, "context": context, "description": description},
        )
        logger.debug("Status {}={} on {}", context, state.value, sha[:7])

    async def post_comment(self, number: int, body: str) -> None:
        await self._request(
            "post_comment",
            "POST",
            self._repo_path(f"/issues/{number}/comments"),
            json={"body": body},
        )
