from src.application.use_cases.classify_event import ClassifyEvent, classify_push
from src.application.use_cases.evaluate_gate import EvaluateGate
from src.application.use_cases.initialize_gate import InitializeGate, build_guide_comment
from src.application.use_cases.override_gate import OverrideGate
from src.application.use_cases.restore_gate import RestoreGate

__all__ = [
    "ClassifyEvent",
    "EvaluateGate",
    "InitializeGate",
    "OverrideGate",
    "RestoreGate",
    "build_guide_comment",
    "classify_push",
]
