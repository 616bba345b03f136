from enum import Enum

from pydantic import BaseModel, Field

from src.domain.value_objects.commit_status import CommitState, CommitStatus
from src.domain.value_objects.gate_messages import GateDescription, is_override_description


class GateState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class GateVerdict(BaseModel, frozen=True):
    state: GateState
    description: str
    failure_reason: str | None = None
    failing_checks: list[str] = Field(default_factory=list)

    @property
    def overridden(self) -> bool:
        return self.state == GateState.SUCCESS and is_override_description(self.description)

    @property
    def passed(self) -> bool:
        return self.state == GateState.SUCCESS

    @property
    def commit_state(self) -> CommitState:
        return CommitState(self.state.value)

    @classmethod
    def from_status(cls, status: CommitStatus | None) -> "GateVerdict":
        """Read the gate back from its latest stored status.

        No status yet, or a non-terminal one, is the PENDING state.
        """
        if status is None:
            return cls(state=GateState.PENDING, description=GateDescription.WAITING.value)
        match status.state:
            case CommitState.SUCCESS:
                state = GateState.SUCCESS
            case CommitState.FAILURE | CommitState.ERROR:
                state = GateState.FAILURE
            case _:
                state = GateState.PENDING
        return cls(state=state, description=status.description)
