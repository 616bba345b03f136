from enum import Enum

from pydantic import BaseModel


class ReviewState(str, Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewState":
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return cls.OTHER


class PullRequestInfo(BaseModel, frozen=True):
    number: int
    head_sha: str
    head_ref: str = ""
    base_ref: str
    is_draft: bool = False


class Review(BaseModel, frozen=True):
    state: ReviewState
    approver_login: str = ""


def count_approvals(reviews: list[Review]) -> int:
    return sum(1 for r in reviews if r.state == ReviewState.APPROVED)
