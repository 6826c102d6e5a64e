"""Error taxonomy surfaced by the Graph mail transport.

Every failure of a send ends up as one of three errors:

- ``TokenAcquisitionFailed``: the identity provider rejected the credential exchange.
- ``CouldNotSendMail``: the sendMail endpoint rejected the message.
- ``ServiceUnreachable``: a network failure (DNS, timeout, refused connection)
  or any other unexpected failure during either call.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator carried by every transport error and by SendResult."""

    TOKEN_ACQUISITION_FAILED = "token_acquisition_failed"
    COULD_NOT_SEND_MAIL = "could_not_send_mail"
    NETWORK = "network"
    UNKNOWN = "unknown"


class GraphMailError(Exception):
    """Base class for all transport errors."""

    kind: ErrorKind

    @property
    def code(self) -> str | None:
        return None

    @property
    def detail(self) -> str | None:
        return None


class TokenAcquisitionFailed(GraphMailError):
    """The token endpoint answered with 4xx/5xx."""

    kind = ErrorKind.TOKEN_ACQUISITION_FAILED

    def __init__(self, error: str, description: str):
        super().__init__(f"Could not acquire access token: {error} ({description})")
        self.error = error
        self.description = description

    @classmethod
    def service_responded_with_error(cls, error: str, description: str) -> "TokenAcquisitionFailed":
        return cls(error, description)

    @property
    def code(self) -> str:
        return self.error

    @property
    def detail(self) -> str:
        return self.description


class CouldNotSendMail(GraphMailError):
    """The sendMail endpoint answered with 4xx/5xx."""

    kind = ErrorKind.COULD_NOT_SEND_MAIL

    def __init__(self, code: str, message: str):
        super().__init__(f"Graph rejected the message: {code} ({message})")
        self.error_code = code
        self.error_message = message

    @classmethod
    def service_responded_with_error(cls, code: str, message: str) -> "CouldNotSendMail":
        return cls(code, message)

    @property
    def code(self) -> str:
        return self.error_code

    @property
    def detail(self) -> str:
        return self.error_message


class ServiceUnreachable(GraphMailError):
    """Network or unknown failure; carries no payload beyond the variant."""

    def __init__(self, kind: ErrorKind):
        if kind not in (ErrorKind.NETWORK, ErrorKind.UNKNOWN):
            raise ValueError(f"Not a service-unreachable variant: {kind!r}")
        if kind is ErrorKind.NETWORK:
            text = "Could not reach Microsoft Graph: network error"
        else:
            text = "Could not reach Microsoft Graph: unknown error"
        super().__init__(text)
        self.kind = kind

    @classmethod
    def network_error(cls) -> "ServiceUnreachable":
        return cls(ErrorKind.NETWORK)

    @classmethod
    def unknown_error(cls) -> "ServiceUnreachable":
        return cls(ErrorKind.UNKNOWN)

    @property
    def is_network_error(self) -> bool:
        return self.kind is ErrorKind.NETWORK


CouldNotReachService = ServiceUnreachable
