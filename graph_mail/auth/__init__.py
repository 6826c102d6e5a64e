"""Client-credentials token acquisition and caching for Graph API access."""

from graph_mail.auth.token_cache import (
    CachedToken,
    MemoryTokenStore,
    TokenCache,
    TokenStore,
    get_default_store,
)

__all__ = [
    "CachedToken",
    "MemoryTokenStore",
    "TokenCache",
    "TokenStore",
    "get_default_store",
]
