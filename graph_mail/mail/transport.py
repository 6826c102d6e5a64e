"""Microsoft Graph mail transport (async, application permissions)."""

from urllib.parse import quote_plus

import httpx

from graph_mail.auth.token_cache import (
    UNKNOWN_ERROR_CODE,
    UNKNOWN_ERROR_MESSAGE,
    TokenCache,
    TokenStore,
)
from graph_mail.config import GRAPH_HTTP_TIMEOUT_SECONDS, GraphMailConfig
from graph_mail.errors import CouldNotSendMail, GraphMailError, ServiceUnreachable
from graph_mail.mail.mapping import build_payload
from graph_mail.models.email import EmailMessage
from graph_mail.models.result import SendResult
from graph_mail.utils.logger import get_logger

logger = get_logger("graph_mail.transport")

SEND_MAIL_ENDPOINT = "https://graph.microsoft.com/v1.0/users/{from}/sendMail"
TRANSPORT_NAME = "microsoft-graph"


def _graph_error(response: httpx.Response) -> tuple[str, str]:
    """Extract (error.code, error.message) from a Graph error body."""
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_ERROR_CODE, UNKNOWN_ERROR_MESSAGE
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return UNKNOWN_ERROR_CODE, UNKNOWN_ERROR_MESSAGE
    return error.get("code") or UNKNOWN_ERROR_CODE, error.get("message") or UNKNOWN_ERROR_MESSAGE


def send_mail_url(sender_address: str) -> str:
    return SEND_MAIL_ENDPOINT.replace("{from}", quote_plus(sender_address, safe=""))


class GraphMailTransport:
    """Sends EmailMessage objects through POST /users/{from}/sendMail.

    Each send is independent; the only shared state is the token slot in the
    TokenStore. Pass an httpx.AsyncClient to share a connection pool (and its
    timeouts) with the host; otherwise the transport owns one and closes it in
    aclose().
    """

    def __init__(
        self,
        config: GraphMailConfig,
        http_client: httpx.AsyncClient | None = None,
        token_store: TokenStore | None = None,
    ):
        self._config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(GRAPH_HTTP_TIMEOUT_SECONDS))
        self._tokens = TokenCache(config, self._http, store=token_store)
        logger.info("graph_transport.init", tenant=config.tenant)

    @classmethod
    def from_env(cls, http_client: httpx.AsyncClient | None = None) -> "GraphMailTransport":
        return cls(GraphMailConfig.from_env(), http_client=http_client)

    def __str__(self) -> str:
        return TRANSPORT_NAME

    async def __aenter__(self) -> "GraphMailTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def send(self, message: EmailMessage) -> None:
        """Send one message.

        Raises TokenAcquisitionFailed (from the token cache, unchanged),
        CouldNotSendMail when Graph answers anything but 2xx, and ServiceUnreachable
        for network or unexpected failures. No retries.
        """
        payload = build_payload(message)
        sender = payload["from"]["emailAddress"]["address"]
        url = send_mail_url(sender)
        log = logger.bind(sender=sender)

        token = await self._tokens.get_token()
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }

        try:
            response = await self._http.post(url, headers=headers, json={"message": payload})
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            log.error("graph_transport.send.network_error", error_type=type(e).__name__)
            raise ServiceUnreachable.network_error() from e
        except Exception as e:
            log.error("graph_transport.send.unknown_error", error=str(e))
            raise ServiceUnreachable.unknown_error() from e

        if not response.is_success:
            code, error_message = _graph_error(response)
            log.error(
                "graph_transport.send.rejected",
                status_code=response.status_code,
                code=code,
                detail=error_message,
            )
            raise CouldNotSendMail.service_responded_with_error(code, error_message)

        log.info(
            "graph_transport.send.ok",
            status_code=response.status_code,
            recipients=len(message.to) + len(message.cc) + len(message.bcc),
            attachments=len(payload.get("attachments", [])),
        )

    async def deliver(self, message: EmailMessage) -> SendResult:
        """Like send(), but returns the outcome as a SendResult instead of raising."""
        try:
            await self.send(message)
        except GraphMailError as e:
            return SendResult.from_error(e)
        return SendResult.success()
