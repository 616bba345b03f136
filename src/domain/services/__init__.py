from src.domain.services.dependency_graph import (
    GATE_JOB,
    TRIGGER_JOB,
    JobGraph,
    JobPlan,
    JobResult,
    PassPredicate,
    build_job_graph,
    pass_predicate,
)
from src.domain.services.gate_evaluator import evaluate_gate, failure_reason
from src.domain.services.trigger_parser import ParsedCommand, match_trigger, parse_comment

__all__ = [
    # Dependency graph
    "GATE_JOB",
    "TRIGGER_JOB",
    "JobGraph",
    "JobPlan",
    "JobResult",
    "PassPredicate",
    "build_job_graph",
    "pass_predicate",
    # Gate evaluator
    "evaluate_gate",
    "failure_reason",
    # Trigger parser
    "ParsedCommand",
    "match_trigger",
    "parse_comment",
]
