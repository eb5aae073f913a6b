"""CodePush CLI entry point."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .commands import show_deployment
from .config import settings
from .core.constants import ENV_VERBOSE, LOG_FILENAME

logger = logging.getLogger("codepush-cli")


def setup_logging(verbose: bool = False) -> None:
    """Send CLI logs to a rotating file; nothing is logged to the console."""
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return

    log_dir = Path(settings.LOG_DIR).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


# Root typer for `codepush` CLI commands
app = typer.Typer(
    help="CodePush CLI for managing app deployments", no_args_is_help=True
)

# Sub-typer for `codepush deployment` commands
app_cmd_deployment = typer.Typer(
    help="Management commands for CodePush deployments", no_args_is_help=True
)
app_cmd_deployment.command(name="show")(show_deployment)
app.add_typer(app_cmd_deployment, name="deployment", help="Manage CodePush deployments")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"CodePush CLI version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        settings.VERBOSE,
        "--verbose",
        help="Write debug details to the log file",
        envvar=ENV_VERBOSE,
    ),
) -> None:
    """CodePush CLI."""
    setup_logging(verbose)


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
