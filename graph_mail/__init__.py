"""Send email through the Microsoft Graph sendMail API with client-credentials auth."""

from graph_mail.config import GraphMailConfig
from graph_mail.errors import (
    CouldNotReachService,
    CouldNotSendMail,
    ErrorKind,
    GraphMailError,
    ServiceUnreachable,
    TokenAcquisitionFailed,
)
from graph_mail.mail import GraphMailTransport, build_payload
from graph_mail.models import Address, DataPart, EmailMessage, SendResult, TextPart

__all__ = [
    "GraphMailConfig",
    "CouldNotReachService",
    "CouldNotSendMail",
    "ErrorKind",
    "GraphMailError",
    "ServiceUnreachable",
    "TokenAcquisitionFailed",
    "GraphMailTransport",
    "build_payload",
    "Address",
    "DataPart",
    "EmailMessage",
    "SendResult",
    "TextPart",
]
