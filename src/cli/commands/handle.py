import asyncio
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from src.application.dto.gate_outcome import GateOutcome
from src.application.event_dispatcher import EventDispatcher
from src.cli.commands.gate import print_outcome
from src.cli.theme import theme
from src.cli.utils import fail, host_settings
from src.domain.entities.check_registry import ConfigError
from src.domain.ports.host_port import HostQueryError
from src.domain.value_objects.decision import Decision
from src.domain.value_objects.events import PushEvent
from src.infrastructure.config.yaml_config_store import YamlConfigStore
from src.infrastructure.events.payload_parser import PayloadError, load_event
from src.infrastructure.host.rest_host_adapter import RestHostAdapter

console = Console()


async def _handle(
    event_name: str, event_path: Path, cwd: Path
) -> list[Decision | GateOutcome]:
    registry = await YamlConfigStore(cwd).load()
    event = load_event(event_name, event_path)
    if event is None:
        return []

    results: list[Decision | GateOutcome] = []
    async with RestHostAdapter(host_settings()) as host:
        dispatcher = EventDispatcher(host, registry)
        if isinstance(event, PushEvent):
            opened = await dispatcher.open_pull_request(event)
            if opened is not None:
                results.append(opened)
        results.append(await dispatcher.dispatch(event))
    return results


def handle(
    event_name: str = typer.Option(..., "--event-name", help="Webhook event name"),
    event_path: Path = typer.Option(..., "--event-path", help="Path to the event payload JSON"),
    cwd: Path = typer.Option(Path("."), "--cwd", help="Repository root"),
) -> None:
    """Dispatch one webhook event to the classifier or the override protocol."""
    try:
        results = asyncio.run(_handle(event_name, event_path, cwd.resolve()))
    except (ConfigError, HostQueryError, PayloadError) as e:
        raise fail(e) from None

    if not results:
        logger.info("Event {} ignored", event_name)
        console.print(f"[{theme.DIM}]Nothing to do for {event_name}.[/]")
        return

    for result in results:
        if isinstance(result, Decision):
            console.print_json(result.model_dump_json(by_alias=True))
        else:
            print_outcome(result)
