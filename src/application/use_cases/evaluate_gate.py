from loguru import logger

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.ports.host_port import HostPort
from src.domain.services.gate_evaluator import evaluate_gate
from src.domain.value_objects.commit_status import CommitState
from src.domain.value_objects.gate_messages import GATE_CONTEXT, override_description
from src.domain.value_objects.pull_request import count_approvals


class EvaluateGate:
    """Compute the merge gate for a commit and write it as a commit status.

    When the gate fails but the PR already carries an approval, the gate is
    written as success-by-override straight away.
    """

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def execute(self, pr_number: int, head_sha: str) -> GateOutcome:
        statuses = await self.host.list_commit_statuses(head_sha)
        verdict = evaluate_gate(self.registry, statuses)

        await self.host.set_commit_status(
            head_sha, GATE_CONTEXT, verdict.commit_state, verdict.description
        )
        if verdict.passed:
            logger.info("Gate passed for {}", head_sha[:7])
            return GateOutcome(action=GateAction.EVALUATED, verdict=verdict)

        logger.info("Gate failed for {}: {}", head_sha[:7], verdict.failure_reason)
        approvals = count_approvals(await self.host.list_reviews(pr_number))
        logger.debug("PR #{} approvals: {}", pr_number, approvals)
        if approvals == 0:
            return GateOutcome(
                action=GateAction.EVALUATED,
                verdict=verdict,
                reason=verdict.failure_reason or "",
            )

        overridden = GateVerdict(
            state=GateState.SUCCESS,
            description=override_description(),
            failure_reason=verdict.failure_reason,
            failing_checks=verdict.failing_checks,
        )
        await self.host.set_commit_status(
            head_sha, GATE_CONTEXT, CommitState.SUCCESS, overridden.description
        )
        logger.info("Gate for {} overridden by existing approval", head_sha[:7])
        return GateOutcome(
            action=GateAction.OVERRIDDEN,
            verdict=overridden,
            reason=verdict.failure_reason or "",
        )
