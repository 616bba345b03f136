from src.domain.value_objects.check_types import (
    CheckCategory,
    Framework,
    Platform,
    PullRequestAction,
    ReviewProvider,
    SetupStep,
)
from src.domain.value_objects.commit_status import (
    CommitState,
    CommitStatus,
    latest_state,
    latest_status,
)
from src.domain.value_objects.decision import AbortReason, Decision
from src.domain.value_objects.events import (
    CommentEvent,
    Event,
    PushEvent,
    ReviewDismissedEvent,
    ReviewSubmittedEvent,
)
from src.domain.value_objects.gate_messages import (
    GATE_CONTEXT,
    OVERRIDE_MARKER,
    GateDescription,
    is_override_description,
    override_description,
)
from src.domain.value_objects.permission import TRIGGER_PERMISSIONS, PermissionLevel
from src.domain.value_objects.pull_request import (
    PullRequestInfo,
    Review,
    ReviewState,
    count_approvals,
)

__all__ = [
    # Check types
    "CheckCategory",
    "Framework",
    "Platform",
    "PullRequestAction",
    "ReviewProvider",
    "SetupStep",
    # Commit status
    "CommitState",
    "CommitStatus",
    "latest_state",
    "latest_status",
    # Decision
    "AbortReason",
    "Decision",
    # Events
    "CommentEvent",
    "Event",
    "PushEvent",
    "ReviewDismissedEvent",
    "ReviewSubmittedEvent",
    # Gate messages
    "GATE_CONTEXT",
    "OVERRIDE_MARKER",
    "GateDescription",
    "is_override_description",
    "override_description",
    # Host data
    "PermissionLevel",
    "PullRequestInfo",
    "Review",
    "ReviewState",
    "TRIGGER_PERMISSIONS",
    "count_approvals",
]
