"""Explicit outcome of a delivery attempt."""

from typing import Optional

from pydantic import BaseModel

from graph_mail.errors import ErrorKind, GraphMailError


class SendResult(BaseModel):
    """ok=True on 2xx; otherwise error names the failure kind.

    code/detail carry the provider's error code and message for
    TOKEN_ACQUISITION_FAILED and COULD_NOT_SEND_MAIL; they stay None for
    the network and unknown variants.
    """

    ok: bool
    error: Optional[ErrorKind] = None
    code: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def success(cls) -> "SendResult":
        return cls(ok=True)

    @classmethod
    def from_error(cls, exc: GraphMailError) -> "SendResult":
        return cls(ok=False, error=exc.kind, code=exc.code, detail=exc.detail)
