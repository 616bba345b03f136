import asyncio
from pathlib import Path

import typer
from rich.console import Console

from src.application.dto.gate_outcome import GateOutcome
from src.application.use_cases.evaluate_gate import EvaluateGate
from src.cli.theme import theme
from src.cli.utils import fail, host_settings
from src.domain.entities.check_registry import ConfigError
from src.domain.entities.gate_verdict import GateState
from src.domain.ports.host_port import HostQueryError
from src.infrastructure.config.yaml_config_store import YamlConfigStore
from src.infrastructure.host.rest_host_adapter import RestHostAdapter

console = Console()

_STATE_STYLE = {
    GateState.SUCCESS: theme.GATE_SUCCESS,
    GateState.FAILURE: theme.GATE_FAILURE,
    GateState.PENDING: theme.GATE_PENDING,
}


def print_outcome(outcome: GateOutcome) -> None:
    verdict = outcome.verdict
    if verdict is None:
        reason = f" ({outcome.reason})" if outcome.reason else ""
        console.print(f"[{theme.DIM}]{outcome.action.value}{reason}[/]")
        return

    style = _STATE_STYLE[verdict.state]
    console.print(
        f"[{theme.HEADER}]{outcome.action.value}:[/] "
        f"[{style}]{verdict.state.value}[/] - {verdict.description}"
    )
    if verdict.failing_checks:
        console.print(f"[{theme.DIM}]Failing: {', '.join(verdict.failing_checks)}[/]")


async def _evaluate(pr: int, sha: str, cwd: Path) -> GateOutcome:
    registry = await YamlConfigStore(cwd).load()
    async with RestHostAdapter(host_settings()) as host:
        return await EvaluateGate(host, registry).execute(pr, sha)


def evaluate_gate(
    pr: int = typer.Option(..., "--pr", help="Pull request number"),
    sha: str = typer.Option(..., "--sha", help="Head commit SHA"),
    cwd: Path = typer.Option(Path("."), "--cwd", help="Repository root"),
) -> None:
    """Aggregate check statuses and write the merge gate status."""
    try:
        outcome = asyncio.run(_evaluate(pr, sha, cwd.resolve()))
    except (ConfigError, HostQueryError) as e:
        raise fail(e) from None

    print_outcome(outcome)
