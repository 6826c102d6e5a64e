"""Pydantic models for the Microsoft Graph sendMail message shape (subset we send)."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

FILE_ATTACHMENT_ODATA_TYPE = "#microsoft.graph.fileAttachment"


class EmailAddress(BaseModel):
    """Graph emailAddress. name is serialized even when None."""

    name: Optional[str] = None
    address: str


class Recipient(BaseModel):
    """Graph recipient (from, sender, toRecipients, etc.)."""

    emailAddress: EmailAddress


class ItemBody(BaseModel):
    """Graph itemBody (message body)."""

    contentType: Literal["text", "html"] = "text"
    content: Optional[str] = None


class FileAttachment(BaseModel):
    """Graph fileAttachment; contentBytes is base64 text, size the raw byte count."""

    odata_type: str = Field(FILE_ATTACHMENT_ODATA_TYPE, alias="@odata.type")
    name: Optional[str] = None
    contentType: str
    contentBytes: str
    size: int

    model_config = {"populate_by_name": True}
