"""Send mode: assemble a message from options and deliver it through Graph."""

import asyncio
from pathlib import Path

import typer

from graph_mail.config import GraphMailConfig
from graph_mail.mail.transport import GraphMailTransport
from graph_mail.models import Address, DataPart, EmailMessage, SendResult
from graph_mail.utils.logger import bind_context, clear_context

from .shared import console, load_config, logger


async def _deliver(config: GraphMailConfig, message: EmailMessage) -> SendResult:
    async with GraphMailTransport(config) as transport:
        return await transport.deliver(message)


def _addresses(values: list[str] | None) -> list[Address]:
    return [Address.parse(v) for v in values or []]


def send(
    sender: str = typer.Option(..., "--from", "-f", help="Sending mailbox, e.g. 'Ops <ops@contoso.com>'"),
    to: list[str] | None = typer.Option(None, "--to", "-t", help="Recipient (repeatable)"),
    cc: list[str] | None = typer.Option(None, "--cc", help="Cc recipient (repeatable)"),
    bcc: list[str] | None = typer.Option(None, "--bcc", help="Bcc recipient (repeatable)"),
    reply_to: list[str] | None = typer.Option(None, "--reply-to", help="Reply-To address (repeatable)"),
    subject: str = typer.Option("", "--subject", "-s", help="Subject line"),
    text: str | None = typer.Option(None, "--text", help="Plain text body"),
    html: str | None = typer.Option(None, "--html", help="HTML body (takes precedence over --text)"),
    attach: list[Path] | None = typer.Option(
        None, "--attach", "-a", exists=True, dir_okay=False, readable=True, help="File to attach (repeatable)"
    ),
    priority: int = typer.Option(3, "--priority", "-p", min=1, max=5, help="1..5, 3 = normal"),
) -> None:
    """Send one email through Microsoft Graph using client credentials from the environment."""
    config = load_config()
    message = EmailMessage(
        subject=subject,
        from_=[Address.parse(sender)],
        to=_addresses(to),
        cc=_addresses(cc),
        bcc=_addresses(bcc),
        reply_to=_addresses(reply_to),
        text_body=text,
        html_body=html,
        attachments=[DataPart.from_path(p) for p in attach or []],
        priority=priority,
    )
    bind_context(command="send")
    log = logger.bind(sender=message.sender.address)
    log.info("send.start", to=len(message.to), attachments=len(message.attachments))

    try:
        result = asyncio.run(_deliver(config, message))
    finally:
        clear_context()

    if result.ok:
        console.print(f"[green]Sent[/green] '{subject}' from {message.sender}")
        log.info("send.ok")
        return

    console.print(f"[red]Send failed ({result.error.value})[/red]")
    if result.code:
        console.print(f"  {result.code}: {result.detail}")
    log.error("send.fail", error=result.error.value, code=result.code)
    raise typer.Exit(1)
