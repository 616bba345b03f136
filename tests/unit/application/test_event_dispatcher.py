"""Unit tests for EventDispatcher routing."""

from unittest.mock import AsyncMock, patch

import pytest

from src.application.dto.gate_outcome import GateAction, GateOutcome
from src.application.event_dispatcher import EventDispatcher
from src.domain.entities.check_registry import CheckRegistry
from src.domain.value_objects.check_types import PullRequestAction
from src.domain.value_objects.commit_status import CommitState
from src.domain.value_objects.decision import AbortReason, Decision
from src.domain.value_objects.events import (
    CommentEvent,
    PushEvent,
    ReviewDismissedEvent,
    ReviewSubmittedEvent,
)
from src.domain.value_objects.gate_messages import GATE_CONTEXT
from tests.fakes import FakeHost, make_registry

SHA = "abc1234def"


class TestDispatch:
    async def test_comment_is_classified(self, host: FakeHost, registry: CheckRegistry) -> None:
        event = CommentEvent(pr_number=7, author_login="maintainer", raw_body="/test")

        result = await EventDispatcher(host, registry).dispatch(event)

        assert isinstance(result, Decision)
        assert result.fired_trigger == "/test"

    async def test_review_submitted_overrides(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        event = ReviewSubmittedEvent(
            pr_number=7, head_sha=SHA, approver_login="alice", base_branch="main"
        )

        result = await EventDispatcher(host, registry).dispatch(event)

        assert isinstance(result, GateOutcome)
        assert result.action == GateAction.OVERRIDDEN

    async def test_review_dismissed_restores(self, host: FakeHost, registry: CheckRegistry) -> None:
        event = ReviewDismissedEvent(pr_number=7, head_sha=SHA, base_branch="main")

        with patch(
            "src.application.event_dispatcher.RestoreGate.execute",
            new_callable=AsyncMock,
            return_value=GateOutcome(action=GateAction.RESTORED),
        ) as mock_restore:
            result = await EventDispatcher(host, registry).dispatch(event)

        mock_restore.assert_awaited_once_with(event)
        assert result.action == GateAction.RESTORED

    async def test_override_protocol_disabled(self, host: FakeHost) -> None:
        registry = make_registry(generateApprovalOverride=False)
        event = ReviewSubmittedEvent(
            pr_number=7, head_sha=SHA, approver_login="alice", base_branch="main"
        )

        result = await EventDispatcher(host, registry).dispatch(event)

        assert result.action == GateAction.NOOP
        assert host.calls == []

    async def test_unsupported_event(self, host: FakeHost, registry: CheckRegistry) -> None:
        with pytest.raises(ValueError, match="Unsupported event"):
            await EventDispatcher(host, registry).dispatch("push")


class TestOpenPullRequest:
    async def test_opened_initializes_gate(self, host: FakeHost, registry: CheckRegistry) -> None:
        event = PushEvent(
            action=PullRequestAction.OPENED, pr_number=7, head_sha=SHA, base_branch="main"
        )

        outcome = await EventDispatcher(host, registry).open_pull_request(event)

        assert outcome.action == GateAction.INITIALIZED
        assert host.statuses[SHA][-1].context == GATE_CONTEXT
        assert host.statuses[SHA][-1].state == CommitState.PENDING

    @pytest.mark.parametrize(
        ("action", "branch"),
        [
            (PullRequestAction.SYNCHRONIZE, "main"),
            (PullRequestAction.OPENED, "release"),
        ],
    )
    async def test_other_pushes_skip(
        self, host: FakeHost, registry: CheckRegistry, action: PullRequestAction, branch: str
    ) -> None:
        event = PushEvent(action=action, pr_number=7, head_sha=SHA, base_branch=branch)

        assert await EventDispatcher(host, registry).open_pull_request(event) is None
        assert host.calls == []


class TestEvaluate:
    async def test_continuing_decision_writes_gate(
        self, host: FakeHost, registry: CheckRegistry
    ) -> None:
        decision = Decision(should_continue=True, pr_number=7, head_sha=SHA, is_official=True)

        outcome = await EventDispatcher(host, registry).evaluate(decision)

        assert outcome.action == GateAction.EVALUATED
        assert host.statuses[SHA][-1].state == CommitState.FAILURE

    async def test_aborted_decision_skipped(self, host: FakeHost, registry: CheckRegistry) -> None:
        decision = Decision.abort(AbortReason.PERMISSION_DENIED, 7)

        assert await EventDispatcher(host, registry).evaluate(decision) is None
