from loguru import logger

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.ports.host_port import HostPort
from src.domain.value_objects.commit_status import CommitState, latest_status
from src.domain.value_objects.events import ReviewSubmittedEvent
from src.domain.value_objects.gate_messages import (
    GATE_CONTEXT,
    override_description,
    override_notice,
)
from src.domain.value_objects.pull_request import ReviewState


class OverrideGate:
    """Force the gate to success when a reviewer approves a failing PR.

    The failing checks are neither retried nor cleared, only masked; the
    override marker in the description lets RestoreGate undo it.
    """

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def execute(self, event: ReviewSubmittedEvent) -> GateOutcome:
        if event.review_state != ReviewState.APPROVED:
            return GateOutcome(action=GateAction.NOOP, reason="review is not an approval")
        if not self.registry.targets_branch(event.base_branch):
            return GateOutcome(
                action=GateAction.NOOP, reason=f"branch {event.base_branch} not targeted"
            )

        current = GateVerdict.from_status(
            latest_status(await self.host.list_commit_statuses(event.head_sha), GATE_CONTEXT)
        )
        if current.passed:
            logger.debug("Gate for {} already passing, nothing to override", event.head_sha[:7])
            return GateOutcome(action=GateAction.NOOP, verdict=current, reason="gate already passing")

        description = override_description(event.approver_login)
        await self.host.set_commit_status(
            event.head_sha, GATE_CONTEXT, CommitState.SUCCESS, description
        )
        await self.host.post_comment(event.pr_number, override_notice(event.approver_login))
        logger.info(
            "Gate for PR #{} overridden by @{}", event.pr_number, event.approver_login
        )
        return GateOutcome(
            action=GateAction.OVERRIDDEN,
            verdict=GateVerdict(state=GateState.SUCCESS, description=description),
        )
