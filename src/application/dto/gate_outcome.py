from enum import Enum

from pydantic import BaseModel

from src.domain.entities.gate_verdict import GateVerdict


class GateAction(str, Enum):
    INITIALIZED = "initialized"
    EVALUATED = "evaluated"
    OVERRIDDEN = "overridden"
    RESTORED = "restored"
    NOOP = "noop"


class GateOutcome(BaseModel):
    action: GateAction
    verdict: GateVerdict | None = None
    reason: str = ""
