"""Shared helpers for CLI commands."""

import typer
from pydantic import ValidationError
from rich.console import Console

from src.cli.theme import theme
from src.domain.entities.check_registry import ConfigError
from src.domain.ports.host_port import HostQueryError
from src.infrastructure.events.payload_parser import PayloadError
from src.infrastructure.host.host_settings import HostSettings

err_console = Console(stderr=True)


def fail(error: Exception) -> typer.Exit:
    """Print a user-facing error and build the exit to raise."""
    match error:
        case ConfigError():
            err_console.print(f"[{theme.ERROR_BOLD}]Config error:[/] {error}")
        case HostQueryError():
            err_console.print(f"[{theme.ERROR_BOLD}]Host error:[/] {error}")
        case PayloadError():
            err_console.print(f"[{theme.ERROR_BOLD}]Event error:[/] {error}")
        case _:
            err_console.print(f"[{theme.ERROR_BOLD}]Error:[/] {error}")
    return typer.Exit(1)


def host_settings() -> HostSettings:
    """Read host settings from the environment, as a ConfigError on failure."""
    try:
        return HostSettings.from_env()
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ConfigError(f"{field}: {error['msg']}") from None
