"""Outbound email message handed to the transport by the host application."""

import mimetypes
from email.utils import parseaddr
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Address(BaseModel):
    """Mailbox address with optional display name. Assumed pre-validated."""

    address: str
    name: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str) -> "Address":
        """Parse 'Name <addr@host>' or a bare address."""
        name, address = parseaddr(value)
        if not address:
            return cls(address=value.strip())
        return cls(address=address, name=name or None)

    def __str__(self) -> str:
        return f"{self.name} <{self.address}>" if self.name else self.address


class DataPart(BaseModel):
    """Binary attachment part (the only kind Graph receives as a file attachment)."""

    kind: Literal["data"] = "data"
    body: bytes
    filename: Optional[str] = None
    content_type: str = "application/octet-stream"

    model_config = {"frozen": True}

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "DataPart":
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            body=path.read_bytes(),
            filename=path.name,
            content_type=content_type or guessed or "application/octet-stream",
        )


class TextPart(BaseModel):
    """Inline text part; never sent as an attachment."""

    kind: Literal["text"] = "text"
    text: str
    content_type: str = "text/plain"

    model_config = {"frozen": True}


MimePart = Annotated[Union[DataPart, TextPart], Field(discriminator="kind")]

def as_address_list(value) -> list[Address]:
    """Resolve one address (bare string or Address) or a sequence of them into a list.

    A bare string carries no display name, so it becomes Address(name=None).
    """
    if not value:
        return []
    if isinstance(value, (str, Address, dict)):
        value = [value]
    addresses = []
    for item in value:
        if isinstance(item, str):
            addresses.append(Address(address=item))
        elif isinstance(item, dict):
            addresses.append(Address.model_validate(item))
        else:
            addresses.append(item)
    return addresses


class EmailMessage(BaseModel):
    """Already-assembled outbound message. Immutable for the duration of a send."""

    subject: str = ""
    from_: list[Address] = Field(alias="from", min_length=1)
    reply_to: list[Address] = []
    to: list[Address] = []
    cc: list[Address] = []
    bcc: list[Address] = []
    priority: int = Field(default=3, ge=1, le=5)  # 3 = neutral
    html_body: Optional[str] = None
    text_body: Optional[str] = None
    attachments: list[MimePart] = []

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("from_", "reply_to", "to", "cc", "bcc", mode="before")
    @classmethod
    def _resolve_recipients(cls, value):
        return as_address_list(value)

    @property
    def sender(self) -> Address:
        return self.from_[0]
