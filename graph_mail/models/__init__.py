"""Message and result models."""

from graph_mail.models.email import (
    Address,
    DataPart,
    EmailMessage,
    MimePart,
    TextPart,
    as_address_list,
)
from graph_mail.models.result import SendResult

__all__ = [
    "Address",
    "DataPart",
    "EmailMessage",
    "MimePart",
    "TextPart",
    "as_address_list",
    "SendResult",
]
