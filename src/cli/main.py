import sys
from pathlib import Path

import typer
from loguru import logger

from src.cli.commands import classify, gate, handle, init, show

LOG_FILE_NAME = "prchecks.log"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Log everything to a rotating file; mirror to stderr with --verbose.

    The file lands in the working directory, which on a CI runner is the
    checked-out repository, so it can be uploaded as a job artifact.
    """
    logger.remove()
    logger.add(
        log_file or Path(LOG_FILE_NAME),
        format=LOG_FORMAT,
        level="DEBUG",
        rotation="10 MB",
        retention=3,
        encoding="utf-8",
    )
    if verbose:
        logger.add(sys.stderr, format="{level: <8} | {message}", level="DEBUG")


app = typer.Typer(
    name="prchecks",
    help="prchecks - pull request check triggers and merge gate",
    no_args_is_help=True,
)

app.command(name="init")(init.init_config)
app.command(name="show")(show.show_config)
app.command(name="classify")(classify.classify)
app.command(name="handle")(handle.handle)

# Gate subcommand group
gate_app = typer.Typer(help="Merge gate commands")
gate_app.command(name="evaluate")(gate.evaluate_gate)
app.add_typer(gate_app, name="gate")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
) -> None:
    """prchecks - pull request check triggers and merge gate."""
    setup_logging(verbose=verbose)


if __name__ == "__main__":
    app()
