from loguru import logger

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.application.use_cases.classify_event import ClassifyEvent
from src.application.use_cases.evaluate_gate import EvaluateGate
from src.application.use_cases.initialize_gate import InitializeGate
from src.application.use_cases.override_gate import OverrideGate
from src.application.use_cases.restore_gate import RestoreGate
from src.domain.entities.check_registry import CheckRegistry
from src.domain.ports.host_port import HostPort
from src.domain.value_objects.check_types import PullRequestAction
from src.domain.value_objects.decision import Decision
from src.domain.value_objects.events import (
    CommentEvent,
    Event,
    PushEvent,
    ReviewDismissedEvent,
    ReviewSubmittedEvent,
)


class EventDispatcher:
    """Route one inbound event to the component that owns it.

    Push and comment events are classified; review events drive the
    override/restore protocol when it is enabled.
    """

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def dispatch(self, event: Event) -> Decision | GateOutcome:
        match event:
            case PushEvent() | CommentEvent():
                return await ClassifyEvent(self.host, self.registry).execute(event)
            case ReviewSubmittedEvent() | ReviewDismissedEvent():
                if not self.registry.settings.generate_override_protocol:
                    logger.debug("Override protocol disabled, ignoring {}", event.kind)
                    return GateOutcome(action=GateAction.NOOP, reason="override protocol disabled")
                if isinstance(event, ReviewSubmittedEvent):
                    return await OverrideGate(self.host, self.registry).execute(event)
                return await RestoreGate(self.host, self.registry).execute(event)
            case _:
                raise ValueError(f"Unsupported event: {event!r}")

    async def open_pull_request(self, event: PushEvent) -> GateOutcome | None:
        """Initialise the gate when a PR targeting a watched branch is opened."""
        if event.action != PullRequestAction.OPENED:
            return None
        if event.base_branch and not self.registry.targets_branch(event.base_branch):
            return None
        return await InitializeGate(self.host, self.registry).execute(
            event.pr_number, event.head_sha
        )

    async def evaluate(self, decision: Decision) -> GateOutcome | None:
        """Run the gate job for a continuing decision."""
        if not decision.should_continue or decision.pr_number is None or not decision.head_sha:
            return None
        return await EvaluateGate(self.host, self.registry).execute(
            decision.pr_number, decision.head_sha
        )
