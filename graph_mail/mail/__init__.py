"""Graph sendMail payload mapping and transport."""

from graph_mail.mail.graph_models import (
    EmailAddress,
    FileAttachment,
    ItemBody,
    Recipient,
)
from graph_mail.mail.mapping import (
    build_payload,
    filter_empty,
    importance_for_priority,
    to_attachment_collection,
    to_recipient_collection,
)
from graph_mail.mail.transport import GraphMailTransport, send_mail_url

__all__ = [
    "EmailAddress",
    "FileAttachment",
    "ItemBody",
    "Recipient",
    "build_payload",
    "filter_empty",
    "importance_for_priority",
    "to_attachment_collection",
    "to_recipient_collection",
    "GraphMailTransport",
    "send_mail_url",
]
