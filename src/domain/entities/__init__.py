from src.domain.entities.check_registry import (
    CheckDefinition,
    CheckRegistry,
    ConfigError,
    GlobalConfig,
    PrReviewCheck,
    PrTestCheck,
    compile_registry,
)
from src.domain.entities.gate_verdict import GateState, GateVerdict

__all__ = [
    "CheckDefinition",
    "CheckRegistry",
    "ConfigError",
    "GateState",
    "GateVerdict",
    "GlobalConfig",
    "PrReviewCheck",
    "PrTestCheck",
    "compile_registry",
]
