"""Unit tests for the merge gate: evaluation, initialisation, override and restore."""

from src.application.dto.gate_outcome import GateAction
from src.application.use_cases.evaluate_gate import EvaluateGate
from src.application.use_cases.initialize_gate import InitializeGate, build_guide_comment
from src.application.use_cases.override_gate import OverrideGate
from src.application.use_cases.restore_gate import RestoreGate
from src.domain.entities.check_registry import CheckRegistry
from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.value_objects.commit_status import CommitState, latest_status
from src.domain.value_objects.events import ReviewDismissedEvent, ReviewSubmittedEvent
from src.domain.value_objects.gate_messages import GATE_CONTEXT
from src.domain.value_objects.pull_request import ReviewState
from tests.fakes import FakeHost

SHA = "abc1234def"


def _gate(host: FakeHost) -> GateVerdict:
    return GateVerdict.from_status(latest_status(host.statuses.get(SHA, []), GATE_CONTEXT))


def _approved(login: str, base_branch: str = "main") -> ReviewSubmittedEvent:
    return ReviewSubmittedEvent(
        pr_number=7, head_sha=SHA, approver_login=login, base_branch=base_branch
    )


def _dismissed(base_branch: str = "main") -> ReviewDismissedEvent:
    return ReviewDismissedEvent(pr_number=7, head_sha=SHA, base_branch=base_branch)


class TestEvaluateGate:
    async def test_passing_checks(self, host: FakeHost, registry: CheckRegistry) -> None:
        host.add_status(SHA, "unit", CommitState.SUCCESS)
        host.add_status(SHA, "ai-review", CommitState.SUCCESS)

        outcome = await EvaluateGate(host, registry).execute(7, SHA)

        assert outcome.action == GateAction.EVALUATED
        assert _gate(host).state == GateState.SUCCESS
        assert _gate(host).description == "All required checks passed"
        assert "list_reviews" not in host.calls

    async def test_failing_checks(self, host: FakeHost, registry: CheckRegistry) -> None:
        host.add_status(SHA, "unit", CommitState.FAILURE)

        outcome = await EvaluateGate(host, registry).execute(7, SHA)

        assert outcome.action == GateAction.EVALUATED
        assert outcome.reason == "unit not passed"
        assert _gate(host).state == GateState.FAILURE
        assert _gate(host).description == "Approval required"

    async def test_existing_approval_overrides(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        host.approve(7, "alice")

        outcome = await EvaluateGate(host, registry).execute(7, SHA)

        assert outcome.action == GateAction.OVERRIDDEN
        assert _gate(host).passed
        assert _gate(host).overridden


class TestInitializeGate:
    async def test_pending_and_guide(self, host: FakeHost, registry: CheckRegistry) -> None:
        outcome = await InitializeGate(host, registry).execute(7, SHA)

        assert outcome.action == GateAction.INITIALIZED
        assert _gate(host).state == GateState.PENDING
        assert _gate(host).description == "Waiting for checks"
        assert host.comments[0][0] == 7

    def test_guide_lists_every_trigger(self, registry: CheckRegistry) -> None:
        guide = build_guide_comment(registry)

        assert "`/test`" in guide
        assert "`/review`" in guide
        assert "`/checks`" in guide


class TestOverrideGate:
    async def test_override_failing_gate(self, host: FakeHost, registry: CheckRegistry) -> None:
        host.add_status(SHA, GATE_CONTEXT, CommitState.FAILURE, "Approval required")
        host.approve(7, "alice")

        outcome = await OverrideGate(host, registry).execute(_approved("alice"))

        assert outcome.action == GateAction.OVERRIDDEN
        assert _gate(host).description == "Overridden by approval (@alice)"
        assert _gate(host).overridden
        assert "@alice" in host.comments[-1][1]

    async def test_override_pending_gate(self, host: FakeHost, registry: CheckRegistry) -> None:
        outcome = await OverrideGate(host, registry).execute(_approved("alice"))

        assert outcome.action == GateAction.OVERRIDDEN

    async def test_passing_gate_untouched(self, host: FakeHost, registry: CheckRegistry) -> None:
        host.add_status(SHA, GATE_CONTEXT, CommitState.SUCCESS, "All required checks passed")

        outcome = await OverrideGate(host, registry).execute(_approved("alice"))

        assert outcome.action == GateAction.NOOP
        assert "set_commit_status" not in host.calls
        assert host.comments == []

    async def test_non_approval_ignored(self, host: FakeHost, registry: CheckRegistry) -> None:
        event = _approved("alice").model_copy(
            update={"review_state": ReviewState.CHANGES_REQUESTED}
        )

        outcome = await OverrideGate(host, registry).execute(event)

        assert outcome.action == GateAction.NOOP
        assert host.calls == []

    async def test_untargeted_branch_ignored(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        outcome = await OverrideGate(host, registry).execute(_approved("alice", "release"))

        assert outcome.action == GateAction.NOOP
        assert host.calls == []


class TestRestoreGate:
    async def _override(self, host: FakeHost, registry: CheckRegistry, login: str) -> None:
        host.approve(7, login)
        await OverrideGate(host, registry).execute(_approved(login))

    async def test_override_then_restore(self, host: FakeHost, registry: CheckRegistry) -> None:
        host.add_status(SHA, "unit", CommitState.FAILURE)
        await EvaluateGate(host, registry).execute(7, SHA)
        await self._override(host, registry, "alice")

        host.dismiss(7, "alice")
        outcome = await RestoreGate(host, registry).execute(_dismissed())

        assert outcome.action == GateAction.RESTORED
        assert _gate(host).state == GateState.FAILURE
        assert _gate(host).description == "Approval required"
        assert "unit" in outcome.reason
        assert "unit not passed" in host.comments[-1][1]

    async def test_other_approval_keeps_override(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        host.add_status(SHA, "unit", CommitState.FAILURE)
        await self._override(host, registry, "alice")
        host.approve(7, "bob")

        host.dismiss(7, "alice")
        outcome = await RestoreGate(host, registry).execute(_dismissed())

        assert outcome.action == GateAction.NOOP
        assert _gate(host).state == GateState.SUCCESS

    async def test_checks_passing_since_override(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        await self._override(host, registry, "alice")
        host.add_status(SHA, "unit", CommitState.SUCCESS)
        host.add_status(SHA, "ai-review", CommitState.FAILURE)

        host.dismiss(7, "alice")
        outcome = await RestoreGate(host, registry).execute(_dismissed())

        assert outcome.action == GateAction.NOOP
        assert _gate(host).overridden

    async def test_not_overridden_left_alone(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        host.add_status(SHA, GATE_CONTEXT, CommitState.SUCCESS, "All required checks passed")

        outcome = await RestoreGate(host, registry).execute(_dismissed())

        assert outcome.action == GateAction.NOOP
        assert "set_commit_status" not in host.calls

    async def test_untargeted_branch_ignored(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        outcome = await RestoreGate(host, registry).execute(_dismissed("release"))

        assert outcome.action == GateAction.NOOP
        assert host.calls == []
