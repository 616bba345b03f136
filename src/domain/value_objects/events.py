"""Inbound repository events.

Built once from the host payload and never mutated. Review events are
consumed by the gate protocol; push and comment events by the classifier.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from src.domain.value_objects.check_types import PullRequestAction
from src.domain.value_objects.pull_request import ReviewState


class PushEvent(BaseModel, frozen=True):
    kind: Literal["push"] = "push"
    action: PullRequestAction
    pr_number: int
    head_sha: str
    is_draft: bool = False
    base_branch: str = ""


class CommentEvent(BaseModel, frozen=True):
    kind: Literal["comment"] = "comment"
    pr_number: int
    author_login: str
    raw_body: str


class ReviewSubmittedEvent(BaseModel, frozen=True):
    kind: Literal["review_submitted"] = "review_submitted"
    pr_number: int
    head_sha: str
    approver_login: str
    base_branch: str
    review_state: ReviewState = ReviewState.APPROVED


class ReviewDismissedEvent(BaseModel, frozen=True):
    kind: Literal["review_dismissed"] = "review_dismissed"
    pr_number: int
    head_sha: str
    base_branch: str


Event = Annotated[
    PushEvent | CommentEvent | ReviewSubmittedEvent | ReviewDismissedEvent,
    Field(discriminator="kind"),
]
