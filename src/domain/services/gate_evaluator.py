from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.services.dependency_graph import PassPredicate, pass_predicate
from src.domain.value_objects.commit_status import CommitStatus, latest_state
from src.domain.value_objects.gate_messages import GateDescription


def failure_reason(name: str, predicate: PassPredicate) -> str:
    if predicate is PassPredicate.MUST_SUCCEED:
        return f"{name} not passed"
    return f"{name} not completed"


def evaluate_gate(registry: CheckRegistry, statuses: list[CommitStatus]) -> GateVerdict:
    """Combine the latest status of every mandatory check into one verdict.

    A check without any status is never treated as passing. The reported
    reason names the first failing check in registry order.
    """
    failing: list[str] = []
    reason: str | None = None
    for check in registry.mandatory_checks():
        predicate = pass_predicate(check)
        if predicate.is_satisfied(latest_state(statuses, check.status_context)):
            continue
        failing.append(check.name)
        if reason is None:
            reason = failure_reason(check.name, predicate)

    if failing:
        return GateVerdict(
            state=GateState.FAILURE,
            description=GateDescription.APPROVAL_REQUIRED.value,
            failure_reason=reason,
            failing_checks=failing,
        )
    return GateVerdict(state=GateState.SUCCESS, description=GateDescription.ALL_PASSED.value)
