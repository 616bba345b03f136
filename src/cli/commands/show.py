import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from src.cli.theme import theme
from src.cli.utils import fail
from src.domain.entities.check_registry import CheckRegistry, ConfigError, PrTestCheck
from src.domain.services.dependency_graph import build_job_graph
from src.infrastructure.config.yaml_config_store import YamlConfigStore

console = Console()


def render_checks(registry: CheckRegistry) -> Table:
    table = Table(title="Checks")
    table.add_column("Name", style=theme.CHECK_NAME)
    table.add_column("Trigger", style=theme.CHECK_TRIGGER)
    table.add_column("Type")
    table.add_column("Runs")
    table.add_column("Gate")
    table.add_column("Auto-run on", style=theme.DIM)

    for check in registry.checks:
        detail = check.command if isinstance(check, PrTestCheck) else check.provider.value
        required = (
            f"[{theme.CHECK_REQUIRED}]required[/]"
            if check.must_run
            else f"[{theme.CHECK_OPTIONAL}]optional[/]"
        )
        gate = "must pass" if check.must_pass else ("must run" if check.must_run else "-")
        table.add_row(
            check.name,
            check.trigger,
            f"{check.category.value} ({detail})",
            required,
            gate,
            ", ".join(sorted(a.value for a in check.effective_auto_run_on)) or "-",
        )
    return table


def render_graph(registry: CheckRegistry) -> Table:
    graph = build_job_graph(registry)
    table = Table(title="Jobs")
    table.add_column("Job", style=theme.CHECK_NAME)
    table.add_column("Needs")
    table.add_column(f"Must succeed on {registry.collective_trigger}")

    for name in graph.topological_order():
        job = graph.get(name)
        table.add_row(
            job.name,
            ", ".join(job.needs) or "-",
            ", ".join(job.collective_prerequisites) or "-",
        )
    return table


def show_config(
    cwd: Path = typer.Option(Path("."), "--cwd", help="Repository root"),
) -> None:
    """Validate the config and print the checks and job graph."""
    try:
        registry = asyncio.run(YamlConfigStore(cwd.resolve()).load())
    except ConfigError as e:
        raise fail(e) from None

    settings = registry.settings
    console.print(f"[{theme.HEADER}]Platform:[/] {settings.platform.value}")
    console.print(f"[{theme.HEADER}]Run all:[/] {settings.collective_trigger}")
    console.print(f"[{theme.HEADER}]Branches:[/] {', '.join(settings.branches)}")
    console.print(
        f"[{theme.HEADER}]Approval override:[/] "
        f"{'enabled' if settings.generate_override_protocol else 'disabled'}"
    )
    console.print(render_checks(registry))
    console.print(render_graph(registry))
