import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.prompt import Confirm

from src.cli.theme import theme
from src.cli.utils import fail
from src.domain.entities.check_registry import ConfigError
from src.infrastructure.config.yaml_config_store import YamlConfigStore

console = Console()


def init_config(
    cwd: Path = typer.Option(Path("."), "--cwd", help="Repository root"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Create .pr-checks/config.yml with the default checks."""
    store = YamlConfigStore(cwd.resolve())
    if store.exists():
        console.print(f"[{theme.DIM}]{store.config_path} already exists.[/]")
        return

    if not yes and not Confirm.ask("Create the default config file?", default=True):
        console.print(f"[{theme.WARNING}]Cancelled.[/]")
        return

    try:
        created = asyncio.run(store.create_default())
    except ConfigError as e:
        raise fail(e) from None

    for path in created:
        console.print(f"[{theme.SUCCESS}]  ✔ {path} created[/]")
    console.print(f"[{theme.DIM}]Edit the checks, then run 'prchecks show'.[/]")
