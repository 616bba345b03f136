from enum import Enum

from pydantic import BaseModel, Field


class AbortReason(str, Enum):
    DRAFT_PULL_REQUEST = "draft_pull_request"
    ACTION_NOT_LISTENED = "action_not_listened"
    BRANCH_NOT_TARGETED = "branch_not_targeted"
    NOT_A_PULL_REQUEST = "not_a_pull_request"
    PERMISSION_DENIED = "permission_denied"
    UNRECOGNIZED_TRIGGER = "unrecognized_trigger"
    HOST_QUERY_FAILED = "host_query_failed"


class Decision(BaseModel, frozen=True):
    """Outcome of classifying one push or comment event.

    Consumed right away by job selection, never persisted. `should_continue`
    maps to the `continue` output (a Python keyword).
    """

    should_continue: bool = Field(serialization_alias="continue")
    pr_number: int | None = None
    head_sha: str | None = None
    fired_trigger: str | None = None
    user_message: str = ""
    is_official: bool = False
    auto_run: dict[str, bool] = Field(default_factory=dict)
    abort_reason: AbortReason | None = None

    @classmethod
    def abort(cls, reason: AbortReason, pr_number: int | None = None) -> "Decision":
        return cls(should_continue=False, pr_number=pr_number, abort_reason=reason)

    def auto_runs(self, check_name: str) -> bool:
        return self.auto_run.get(check_name, False)
