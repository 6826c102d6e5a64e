"""Configuration and settings."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"
LOG_FILE = os.getenv("LOG_FILE", "")  # empty = console only

# Graph application credentials (client-credentials flow)
GRAPH_TENANT_ID = os.getenv("GRAPH_TENANT_ID", "")
GRAPH_CLIENT_ID = os.getenv("GRAPH_CLIENT_ID", "")
GRAPH_CLIENT_SECRET = os.getenv("GRAPH_CLIENT_SECRET", "")

# HTTP client used when the transport owns its own connection pool
GRAPH_HTTP_TIMEOUT_SECONDS = float(os.getenv("GRAPH_HTTP_TIMEOUT_SECONDS", "30.0"))

DEFAULT_TENANT = "common"


class GraphMailConfig(BaseModel):
    """Credentials for one tenant/app registration."""

    tenant: str = DEFAULT_TENANT
    client: str = Field(min_length=1)
    secret: str = Field(min_length=1, repr=False)

    model_config = {"frozen": True}

    @field_validator("tenant", mode="before")
    @classmethod
    def _default_tenant(cls, value):
        return value or DEFAULT_TENANT

    @classmethod
    def from_env(cls) -> "GraphMailConfig":
        """Build config from GRAPH_* environment variables (read at call time)."""
        return cls(
            tenant=os.getenv("GRAPH_TENANT_ID", GRAPH_TENANT_ID),
            client=os.getenv("GRAPH_CLIENT_ID", GRAPH_CLIENT_ID),
            secret=os.getenv("GRAPH_CLIENT_SECRET", GRAPH_CLIENT_SECRET),
        )
