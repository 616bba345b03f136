"""Gate context name, status descriptions and notification texts.

The host status API only stores free text, so an override is recorded by
putting OVERRIDE_MARKER into the gate description.
"""

from enum import Enum

GATE_CONTEXT = "PR Checks Status"

OVERRIDE_MARKER = "Overridden"


class GateDescription(str, Enum):
    WAITING = "Waiting for checks"
    ALL_PASSED = "All required checks passed"
    APPROVAL_REQUIRED = "Approval required"
    OVERRIDDEN = "Overridden by approval"


def override_description(approver_login: str | None = None) -> str:
    if approver_login:
        return f"{GateDescription.OVERRIDDEN.value} (@{approver_login})"
    return GateDescription.OVERRIDDEN.value


def is_override_description(description: str) -> bool:
    return OVERRIDE_MARKER in description


def override_notice(approver_login: str) -> str:
    return (
        "## Merge Gate Override\n\n"
        f"{GATE_CONTEXT} was overridden by the approval of **@{approver_login}**.\n\n"
        "The pull request can be merged."
    )


def restore_notice(failure_reason: str | None) -> str:
    reason = f"\n\nStill failing: {failure_reason}" if failure_reason else ""
    return (
        "## Merge Gate Restored\n\n"
        f"The approval was dismissed, so {GATE_CONTEXT} is back to failure."
        f"{reason}\n\n"
        "A new approval is required to merge."
    )
