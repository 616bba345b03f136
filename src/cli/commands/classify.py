import asyncio
from pathlib import Path

import typer
from rich.console import Console

from src.application.use_cases.classify_event import ClassifyEvent, classify_push
from src.cli.utils import fail, host_settings
from src.domain.entities.check_registry import ConfigError
from src.domain.ports.host_port import HostQueryError
from src.domain.value_objects.decision import AbortReason, Decision
from src.domain.value_objects.events import CommentEvent, PushEvent
from src.infrastructure.config.yaml_config_store import YamlConfigStore
from src.infrastructure.events.payload_parser import PayloadError, load_event
from src.infrastructure.host.rest_host_adapter import RestHostAdapter

console = Console()


async def _classify(event_name: str, event_path: Path, cwd: Path) -> Decision:
    registry = await YamlConfigStore(cwd).load()
    event = load_event(event_name, event_path)
    if not isinstance(event, PushEvent | CommentEvent):
        return Decision.abort(AbortReason.NOT_A_PULL_REQUEST)
    if isinstance(event, PushEvent):
        return classify_push(registry, event)

    async with RestHostAdapter(host_settings()) as host:
        return await ClassifyEvent(host, registry).execute(event)


def classify(
    event_name: str = typer.Option(..., "--event-name", help="Webhook event name"),
    event_path: Path = typer.Option(..., "--event-path", help="Path to the event payload JSON"),
    cwd: Path = typer.Option(Path("."), "--cwd", help="Repository root"),
) -> None:
    """Classify a push or comment event and print the decision as JSON."""
    try:
        decision = asyncio.run(_classify(event_name, event_path, cwd.resolve()))
    except (ConfigError, HostQueryError, PayloadError) as e:
        raise fail(e) from None

    console.print_json(decision.model_dump_json(by_alias=True))
