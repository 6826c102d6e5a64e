"""Map an EmailMessage to the Graph sendMail message payload."""

import base64
from typing import Any, Iterable, Sequence

from graph_mail.mail.graph_models import EmailAddress, FileAttachment, ItemBody, Recipient
from graph_mail.models.email import Address, DataPart, EmailMessage, MimePart
from graph_mail.utils.logger import get_logger

logger = get_logger("graph_mail.mapping")

NEUTRAL_PRIORITY = 3


def to_recipient_collection(recipients: Sequence[Address] | None) -> list[dict[str, Any]]:
    """Convert addresses into a Graph recipient collection.

    Empty input gives an empty list. Order and display names are kept verbatim;
    EmailMessage has already turned a bare address into Address(name=None).
    """
    return [
        Recipient(emailAddress=EmailAddress(name=a.name, address=a.address)).model_dump()
        for a in recipients or []
    ]


def to_attachment_collection(parts: Iterable[MimePart]) -> list[dict[str, Any]]:
    """Convert binary parts into Graph fileAttachment objects; other part kinds are skipped."""
    collection = []
    for part in parts or []:
        if not isinstance(part, DataPart):
            continue
        attachment = FileAttachment(
            name=part.filename,
            contentType=part.content_type,
            contentBytes=base64.b64encode(part.body).decode("ascii"),
            size=len(part.body),
        )
        collection.append(attachment.model_dump(by_alias=True))
    return collection


def importance_for_priority(priority: int) -> str:
    """Collapse the 1..5 priority scale into Graph's three importance levels."""
    if priority == NEUTRAL_PRIORITY:
        return "Normal"
    return "Low" if priority < NEUTRAL_PRIORITY else "High"


def filter_empty(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is empty, false, None or an empty collection."""
    return {key: value for key, value in payload.items() if value}


def build_payload(message: EmailMessage) -> dict[str, Any]:
    """Build the Graph message object for sendMail.

    sender and from are both the first "from" address; any further from
    addresses are ignored. The body is HTML when html_body is non-empty,
    plain text otherwise.
    """
    senders = to_recipient_collection(message.from_)
    if len(senders) > 1:
        logger.debug("mapping.build_payload.extra_from_ignored", ignored=len(senders) - 1)
    sender = senders[0] if senders else None

    if message.html_body:
        body = ItemBody(contentType="html", content=message.html_body)
    else:
        body = ItemBody(contentType="text", content=message.text_body)

    return filter_empty({
        "subject": message.subject,
        "sender": sender,
        "from": sender,
        "replyTo": to_recipient_collection(message.reply_to),
        "toRecipients": to_recipient_collection(message.to),
        "ccRecipients": to_recipient_collection(message.cc),
        "bccRecipients": to_recipient_collection(message.bcc),
        "importance": importance_for_priority(message.priority),
        "body": body.model_dump(),
        "attachments": to_attachment_collection(message.attachments),
    })
