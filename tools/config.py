"""Shared configuration for MCP tools."""

import os
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import Context

from shared.constants import API_KEY_HEADER, BASE_URL_HEADER
from shared.shippo_client import ShippoClient, TenantCredentials, create_shippo_client

load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Integer env var, falling back to ``default`` when unset or malformed."""
    try:
        return int(os.getenv(name, ""))
    except ValueError:
        return default


# Single-tenant fallback for the stdio transport only; HTTP callers must send
# their own key
SHIPPO_API_KEY = os.getenv("SHIPPO_API_KEY", "")
SHIPPO_BASE_URL = os.getenv("SHIPPO_BASE_URL", "").rstrip("/")
SHIPPO_TIMEOUT = _env_int("SHIPPO_TIMEOUT", 30)

CHARACTER_LIMIT = _env_int("CHARACTER_LIMIT", 50000)
DEFAULT_PAGE_SIZE = _env_int("DEFAULT_PAGE_SIZE", 20)
MAX_PAGE_SIZE = _env_int("MAX_PAGE_SIZE", 100)

MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = _env_int("MCP_PORT", 8000)
MCP_TRANSPORT = os.getenv("MCP_TRANSPORT", "streamable-http")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).resolve().parent.parent / "logs")))


def resolve_credentials(headers, use_env: bool = False) -> TenantCredentials:
    """Credentials from request headers.

    The environment fallback applies only when ``use_env`` is set, which is the
    case for stdio calls that have no HTTP request behind them.
    """
    headers = headers or {}
    env_key = SHIPPO_API_KEY if use_env else ""
    env_base_url = SHIPPO_BASE_URL if use_env else ""
    return TenantCredentials(
        api_key=headers.get(API_KEY_HEADER) or env_key or None,
        base_url=headers.get(BASE_URL_HEADER) or env_base_url or None,
    )


def credentials_from_context(ctx: Context | None) -> TenantCredentials:
    """Read tenant credentials off the HTTP request behind an MCP call.

    Under stdio there is no HTTP request, so only the environment applies.
    An HTTP call is scoped to its own headers and never sees the operator key.
    """
    request = None
    if ctx is not None:
        try:
            request = ctx.request_context.request
        except ValueError:
            request = None
    if request is None:
        return resolve_credentials(None, use_env=MCP_TRANSPORT == "stdio")
    return resolve_credentials(request.headers)


def client_for(ctx: Context | None) -> ShippoClient:
    """Fresh client for the current call, never cached or shared."""
    return create_shippo_client(credentials_from_context(ctx), timeout=SHIPPO_TIMEOUT)
