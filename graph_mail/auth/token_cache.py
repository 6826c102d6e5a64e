"""Client-credentials access token for Graph, cached for a short window.

One token is shared by every send within a 45 second window. On a miss the
token is fetched from the Microsoft identity platform and stored in a
TokenStore slot under a fixed key. Concurrent misses may each fetch; the slot
is replaced wholesale so the last writer wins.
"""

import time
from typing import Awaitable, Callable, Protocol

import httpx
from pydantic import BaseModel

from graph_mail.config import GraphMailConfig
from graph_mail.errors import ServiceUnreachable, TokenAcquisitionFailed
from graph_mail.utils.logger import get_logger

logger = get_logger("graph_mail.auth.token_cache")

TOKEN_ENDPOINT = "https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"
TOKEN_CACHE_KEY = "graph-mail-accesstoken"
TOKEN_TTL_SECONDS = 45

UNKNOWN_ERROR_CODE = "Unknown"
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class CachedToken(BaseModel):
    """Token value plus the clock reading after which it must not be reused."""

    value: str
    expiry: float

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return f"CachedToken(value=<redacted>, expiry={self.expiry})"


class TokenStore(Protocol):
    """Key/value cache with a get-or-compute-with-TTL primitive."""

    async def remember(
        self,
        key: str,
        ttl_seconds: float,
        factory: Callable[[], Awaitable[str]],
    ) -> str:
        ...

    def forget(self, key: str) -> None:
        ...


class MemoryTokenStore:
    """In-process TokenStore. No locking: a slot is only ever replaced, never mutated."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._slots: dict[str, CachedToken] = {}

    def get(self, key: str) -> CachedToken | None:
        """Return the cached token for key if it has not expired."""
        cached = self._slots.get(key)
        if cached is None or self._clock() >= cached.expiry:
            return None
        return cached

    async def remember(
        self,
        key: str,
        ttl_seconds: float,
        factory: Callable[[], Awaitable[str]],
    ) -> str:
        cached = self.get(key)
        if cached is not None:
            return cached.value
        value = await factory()
        self._slots[key] = CachedToken(value=value, expiry=self._clock() + ttl_seconds)
        return value

    def forget(self, key: str) -> None:
        self._slots.pop(key, None)


_default_store = MemoryTokenStore()


def get_default_store() -> MemoryTokenStore:
    """Process-wide store shared by every transport that does not inject its own."""
    return _default_store


def _token_error(response: httpx.Response) -> tuple[str, str]:
    """Extract (error, error_description) from an identity platform error body."""
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_ERROR_CODE, UNKNOWN_ERROR_MESSAGE
    if not isinstance(data, dict):
        return UNKNOWN_ERROR_CODE, UNKNOWN_ERROR_MESSAGE
    return (
        data.get("error") or UNKNOWN_ERROR_CODE,
        data.get("error_description") or UNKNOWN_ERROR_MESSAGE,
    )


class TokenCache:
    """Hands out bearer tokens for one tenant/app configuration."""

    def __init__(
        self,
        config: GraphMailConfig,
        http_client: httpx.AsyncClient,
        store: TokenStore | None = None,
        ttl_seconds: float = TOKEN_TTL_SECONDS,
        cache_key: str = TOKEN_CACHE_KEY,
    ):
        self._config = config
        self._http = http_client
        self._store = store if store is not None else get_default_store()
        self._ttl_seconds = ttl_seconds
        self._cache_key = cache_key

    @property
    def token_url(self) -> str:
        return TOKEN_ENDPOINT.replace("{tenant}", self._config.tenant)

    async def get_token(self) -> str:
        """Return a cached token, fetching a new one when the slot is empty or expired.

        Raises TokenAcquisitionFailed when the endpoint answers 4xx/5xx and
        ServiceUnreachable for network or unexpected failures.
        """
        return await self._store.remember(self._cache_key, self._ttl_seconds, self._request_token)

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        self._store.forget(self._cache_key)

    async def _request_token(self) -> str:
        logger.debug("token_cache.fetch.start", tenant=self._config.tenant)
        try:
            response = await self._http.post(
                self.token_url,
                data={
                    "client_id": self._config.client,
                    "client_secret": self._config.secret,
                    "scope": GRAPH_SCOPE,
                    "grant_type": "client_credentials",
                },
            )
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            logger.error("token_cache.fetch.network_error", tenant=self._config.tenant, error_type=type(e).__name__)
            raise ServiceUnreachable.network_error() from e
        except Exception as e:
            logger.error("token_cache.fetch.unknown_error", tenant=self._config.tenant, error=str(e))
            raise ServiceUnreachable.unknown_error() from e

        if response.is_error:
            error, description = _token_error(response)
            logger.error(
                "token_cache.fetch.rejected",
                tenant=self._config.tenant,
                status_code=response.status_code,
                error=error,
            )
            raise TokenAcquisitionFailed.service_responded_with_error(error, description)

        try:
            token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("token_cache.fetch.malformed_response", tenant=self._config.tenant)
            raise ServiceUnreachable.unknown_error() from e
        if not isinstance(token, str) or not token:
            logger.error("token_cache.fetch.malformed_response", tenant=self._config.tenant)
            raise ServiceUnreachable.unknown_error()

        logger.info("token_cache.fetch.ok", tenant=self._config.tenant)
        return token
