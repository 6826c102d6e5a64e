"""Shared CLI helpers: console, logger, config loading."""

import typer
from pydantic import ValidationError
from rich.console import Console

from graph_mail.config import GraphMailConfig
from graph_mail.utils.logger import get_logger

console = Console()
logger = get_logger("graph_mail.cli")


def load_config() -> GraphMailConfig:
    """Read GRAPH_* credentials from the environment or exit with a readable message."""
    try:
        return GraphMailConfig.from_env()
    except ValidationError as e:
        missing = [
            {"client": "GRAPH_CLIENT_ID", "secret": "GRAPH_CLIENT_SECRET"}.get(str(err["loc"][0]), str(err["loc"][0]))
            for err in e.errors()
        ]
        console.print(f"[red]Missing or invalid environment variables: {', '.join(missing)}[/red]")
        logger.warning("cli.missing_env", missing=missing)
        raise typer.Exit(1) from e
