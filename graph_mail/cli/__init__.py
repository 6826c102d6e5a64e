"""CLI commands."""

from typer import Typer

from graph_mail.cli import send_mode
from graph_mail.utils.logger import setup_logging

app = Typer(help="Send email through Microsoft Graph")


@app.callback()
def main() -> None:
    """Microsoft Graph mail transport."""
    setup_logging()


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(send_mode.send)


register_commands()
