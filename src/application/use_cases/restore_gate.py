from loguru import logger

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateVerdict
from src.domain.ports.host_port import HostPort
from src.domain.services.gate_evaluator import evaluate_gate
from src.domain.value_objects.commit_status import latest_status
from src.domain.value_objects.events import ReviewDismissedEvent
from src.domain.value_objects.gate_messages import GATE_CONTEXT, restore_notice
from src.domain.value_objects.pull_request import count_approvals


class RestoreGate:
    """Revert an override once the approval behind it is dismissed.

    Leaves the gate alone when another approval still covers it, when the
    gate was not overridden, or when the checks have since really passed.
    """

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def execute(self, event: ReviewDismissedEvent) -> GateOutcome:
        if not self.registry.targets_branch(event.base_branch):
            return GateOutcome(
                action=GateAction.NOOP, reason=f"branch {event.base_branch} not targeted"
            )

        approvals = count_approvals(await self.host.list_reviews(event.pr_number))
        if approvals > 0:
            logger.info("PR #{} still has {} approval(s), keeping gate", event.pr_number, approvals)
            return GateOutcome(action=GateAction.NOOP, reason="another approval remains")

        statuses = await self.host.list_commit_statuses(event.head_sha)
        current = GateVerdict.from_status(latest_status(statuses, GATE_CONTEXT))
        if not current.overridden:
            return GateOutcome(action=GateAction.NOOP, verdict=current, reason="gate not overridden")

        verdict = evaluate_gate(self.registry, statuses)
        if verdict.passed:
            logger.info("Checks for {} now pass, override superseded", event.head_sha[:7])
            return GateOutcome(action=GateAction.NOOP, verdict=current, reason="checks now pass")

        await self.host.set_commit_status(
            event.head_sha, GATE_CONTEXT, verdict.commit_state, verdict.description
        )
        await self.host.post_comment(event.pr_number, restore_notice(verdict.failure_reason))
        logger.info("Gate for PR #{} restored: {}", event.pr_number, verdict.failure_reason)
        return GateOutcome(
            action=GateAction.RESTORED,
            verdict=verdict,
            reason=verdict.failure_reason or "",
        )
