from datetime import UTC, datetime

from src.domain.entities.gate_verdict import GateState, GateVerdict
from src.domain.value_objects.commit_status import (
    CommitState,
    CommitStatus,
    latest_state,
    latest_status,
)
from src.domain.value_objects.gate_messages import override_description


def _status(context: str, state: CommitState, minute: int, description: str = "") -> CommitStatus:
    return CommitStatus(
        context=context,
        state=state,
        description=description,
        updated_at=datetime(2024, 1, 1, 12, minute, tzinfo=UTC),
    )


def test_latest_status_picks_most_recent():
    statuses = [
        _status("unit", CommitState.SUCCESS, 5),
        _status("unit", CommitState.FAILURE, 1),
        _status("lint", CommitState.FAILURE, 9),
    ]

    assert latest_state(statuses, "unit") == CommitState.SUCCESS


def test_latest_status_ties_keep_host_order():
    statuses = [
        _status("unit", CommitState.FAILURE, 3, "first"),
        _status("unit", CommitState.SUCCESS, 3, "second"),
    ]

    assert latest_status(statuses, "unit").description == "second"


def test_missing_context_is_none():
    assert latest_status([], "unit") is None
    assert latest_state([], "unit") == CommitState.NONE


class TestGateVerdictFromStatus:
    def test_no_status_is_pending(self):
        verdict = GateVerdict.from_status(None)

        assert verdict.state == GateState.PENDING
        assert not verdict.passed
        assert not verdict.overridden

    def test_override_marker_detected(self):
        verdict = GateVerdict.from_status(
            _status("PR Checks Status", CommitState.SUCCESS, 1, override_description("alice"))
        )

        assert verdict.passed
        assert verdict.overridden

    def test_plain_success_not_overridden(self):
        verdict = GateVerdict.from_status(
            _status("PR Checks Status", CommitState.SUCCESS, 1, "All required checks passed")
        )

        assert verdict.passed
        assert not verdict.overridden

    def test_error_counts_as_failure(self):
        verdict = GateVerdict.from_status(_status("PR Checks Status", CommitState.ERROR, 1))

        assert verdict.state == GateState.FAILURE
        assert verdict.commit_state == CommitState.FAILURE
