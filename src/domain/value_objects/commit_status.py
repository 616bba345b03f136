from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class CommitState(str, Enum):
    NONE = "none"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


class CommitStatus(BaseModel, frozen=True):
    context: str
    state: CommitState
    description: str = ""
    updated_at: datetime


def latest_status(statuses: list[CommitStatus], context: str) -> CommitStatus | None:
    """Return the most recent status for a context.

    Older entries for the same context are re-run history. The sort is
    stable, so entries sharing a timestamp keep host order and the last
    one wins.
    """
    matching = [s for s in statuses if s.context == context]
    if not matching:
        return None
    return sorted(matching, key=lambda s: s.updated_at)[-1]


def latest_state(statuses: list[CommitStatus], context: str) -> CommitState:
    status = latest_status(statuses, context)
    return status.state if status else CommitState.NONE
