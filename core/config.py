# =============================================================================
# core/config.py  —  Settings for the content service adapter
# =============================================================================
#
# Every setting can be overridden through the environment.  The entry points
# (tools/mcp_server.py, main.py) call load_dotenv() first, so a local .env
# file works too.
#
#   DXD_CONTENT_URL      GraphQL endpoint of the content service
#   DXD_TOKEN_URL        OAuth2 token endpoint (client-credentials grant)
#   DXD_CLIENT_ID        OAuth2 client id
#   DXD_CLIENT_SECRET    OAuth2 client secret (unset → no authentication)
#   DXD_REQUEST_TIMEOUT  Seconds before an outbound call is abandoned
#   DXD_MCP_TRANSPORT    stdio | http | sse | streamable-http
#   DXD_MCP_HOST         Bind host for the network transports
#   DXD_MCP_PORT         Listening port for the network transports
#   LOG_LEVEL            Root log level
# =============================================================================

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_CONTENT_URL = "http://localhost:8081/cd/api"
DEFAULT_TOKEN_URL = "http://localhost:8082/token.svc"
DEFAULT_CLIENT_ID = "cduser"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MCP_PORT = 8085

MCP_TRANSPORTS = ("stdio", "http", "sse", "streamable-http")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings, built once at startup."""

    content_url: str = DEFAULT_CONTENT_URL
    token_url: str = DEFAULT_TOKEN_URL
    client_id: str = DEFAULT_CLIENT_ID
    client_secret: Optional[str] = None
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    mcp_transport: str = "stdio"
    mcp_host: str = "127.0.0.1"
    mcp_port: int = DEFAULT_MCP_PORT
    log_level: str = "INFO"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.client_secret)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from `environ` (defaults to os.environ).

        Raises:
            ConfigurationError: if a numeric value or the transport name
                cannot be understood.
        """
        env = os.environ if environ is None else environ

        transport = env.get("DXD_MCP_TRANSPORT", "stdio").strip().lower()
        if transport not in MCP_TRANSPORTS:
            raise ConfigurationError(
                f"DXD_MCP_TRANSPORT must be one of {', '.join(MCP_TRANSPORTS)}, got {transport!r}"
            )

        return cls(
            content_url=env.get("DXD_CONTENT_URL", DEFAULT_CONTENT_URL),
            token_url=env.get("DXD_TOKEN_URL", DEFAULT_TOKEN_URL),
            client_id=env.get("DXD_CLIENT_ID", DEFAULT_CLIENT_ID),
            client_secret=env.get("DXD_CLIENT_SECRET") or None,
            request_timeout=_parse_number(env, "DXD_REQUEST_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float),
            mcp_transport=transport,
            mcp_host=env.get("DXD_MCP_HOST", "127.0.0.1"),
            mcp_port=_parse_number(env, "DXD_MCP_PORT", DEFAULT_MCP_PORT, int),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def _parse_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {raw!r}")
    return value
