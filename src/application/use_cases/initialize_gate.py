from loguru import logger

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.ports.host_port import HostPort
from src.domain.value_objects.commit_status import CommitState
from src.domain.value_objects.gate_messages import GATE_CONTEXT, GateDescription


def build_guide_comment(registry: CheckRegistry) -> str:
    """List every trigger command and whether it counts for the gate."""
    rows = []
    for check in registry.checks:
        required = "Yes" if check.must_run else "No"
        must_pass = " (must pass)" if check.must_pass else ""
        rows.append(f"| `{check.trigger}` | {check.name} | {required}{must_pass} |")

    return "\n".join(
        [
            "## PR Checks Guide",
            "",
            "### Commands",
            "| Command | Description | Required |",
            "|---------|-------------|----------|",
            *rows,
            f"| `{registry.collective_trigger}` | Run all required checks | - |",
            "",
            "### Merge Requirements",
            "All required checks must be completed, or approval is needed.",
        ]
    )


class InitializeGate:
    """Put a freshly opened PR's gate into the pending state."""

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def execute(self, pr_number: int, head_sha: str) -> GateOutcome:
        await self.host.post_comment(pr_number, build_guide_comment(self.registry))
        await self.host.set_commit_status(
            head_sha, GATE_CONTEXT, CommitState.PENDING, GateDescription.WAITING.value
        )
        logger.info("Gate initialised for PR #{} at {}", pr_number, head_sha[:7])
        return GateOutcome(
            action=GateAction.INITIALIZED,
            verdict=GateVerdict(state=GateState.PENDING, description=GateDescription.WAITING.value),
        )
