from src.application.dto.gate_outcome import GateAction, GateOutcome

__all__ = [
    "GateAction",
    "GateOutcome",
]
