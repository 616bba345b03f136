"""Turn a host webhook payload into a domain Event.

Returns None for anything the engine does not act on: comments on plain
issues, edited/deleted comments, unsupported PR actions and other event
names.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from src.domain.value_objects.check_types import PullRequestAction
from src.domain.value_objects.events import (
    CommentEvent,
    Event,
    PushEvent,
    ReviewDismissedEvent,
    ReviewSubmittedEvent,
)
from src.domain.value_objects.pull_request import ReviewState


class PayloadError(ValueError):
    """Raised when a webhook payload is missing fields the engine needs."""


def _require(data: dict[str, Any], *keys: str) -> Any:
    value: Any = data
    for key in keys:
        if not isinstance(value, dict) or value.get(key) is None:
            raise PayloadError(f"payload is missing {'.'.join(keys)}")
        value = value[key]
    return value


def _parse_pull_request(payload: dict[str, Any]) -> PushEvent | None:
    try:
        action = PullRequestAction(payload.get("action", ""))
    except ValueError:
        logger.debug("Ignoring pull_request action {}", payload.get("action"))
        return None
    pr = _require(payload, "pull_request")
    return PushEvent(
        action=action,
        pr_number=int(_require(pr, "number")),
        head_sha=_require(pr, "head", "sha"),
        is_draft=bool(pr.get("draft", False)),
        base_branch=(pr.get("base") or {}).get("ref", ""),
    )


def _parse_issue_comment(payload: dict[str, Any]) -> CommentEvent | None:
    if payload.get("action", "created") != "created":
        return None
    issue = _require(payload, "issue")
    if not issue.get("pull_request"):
        logger.debug("Comment on issue #{} is not on a pull request", issue.get("number"))
        return None
    comment = _require(payload, "comment")
    return CommentEvent(
        pr_number=int(_require(issue, "number")),
        author_login=_require(comment, "user", "login"),
        raw_body=comment.get("body") or "",
    )


def _parse_review(payload: dict[str, Any]) -> ReviewSubmittedEvent | ReviewDismissedEvent | None:
    pr = _require(payload, "pull_request")
    pr_number = int(_require(pr, "number"))
    head_sha = _require(pr, "head", "sha")
    base_branch = _require(pr, "base", "ref")
    match payload.get("action"):
        case "submitted":
            review = _require(payload, "review")
            return ReviewSubmittedEvent(
                pr_number=pr_number,
                head_sha=head_sha,
                approver_login=_require(review, "user", "login"),
                base_branch=base_branch,
                review_state=ReviewState.parse(review.get("state")),
            )
        case "dismissed":
            return ReviewDismissedEvent(
                pr_number=pr_number, head_sha=head_sha, base_branch=base_branch
            )
        case _:
            return None


def parse_event(event_name: str, payload: dict[str, Any]) -> Event | None:
    match event_name:
        case "pull_request" | "pull_request_target":
            return _parse_pull_request(payload)
        case "issue_comment":
            return _parse_issue_comment(payload)
        case "pull_request_review":
            return _parse_review(payload)
        case _:
            logger.debug("Ignoring event {}", event_name)
            return None


def load_event(event_name: str, event_path: Path) -> Event | None:
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PayloadError(f"cannot read event payload {event_path}: {e}") from e
    if not isinstance(payload, dict):
        raise PayloadError(f"event payload {event_path} must be a JSON object")
    return parse_event(event_name, payload)
