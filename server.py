"""MCP Server for Shippo: multi-carrier shipping over the Model Context Protocol.

Every tool call is scoped to the caller's own Shippo account: the API key
(and optional base-URL override) travel as request headers and a fresh
client is built per call.

─── Account ───
    shippo_test_connection
─── Addresses / parcels / shipments / rates ───
    shippo_list_addresses, shippo_get_address, shippo_create_address, shippo_validate_address
    shippo_list_parcels, shippo_get_parcel, shippo_create_parcel
    shippo_list_shipments, shippo_get_shipment, shippo_create_shipment
    shippo_get_rate, shippo_list_shipment_rates
─── Labels / tracking / refunds ───
    shippo_list_transactions, shippo_get_transaction, shippo_create_transaction,
    shippo_create_instant_transaction
    shippo_get_tracking_status, shippo_register_tracking_webhook
    shippo_create_refund, shippo_get_refund
─── Carriers / customs / manifests / batches / pickups ───
    shippo_*_carrier_account(s), shippo_*_customs_item(s), shippo_*_customs_declaration(s)
    shippo_*_manifest(s), shippo_*batch*, shippo_create_pickup
─── Orders / checkout ───
    shippo_*_order(s), shippo_*_service_group(s), shippo_*_parcel_template(s),
    shippo_create_live_rate, shippo_*_default_parcel_template

Run the server:
    python server.py            (MCP_TRANSPORT=streamable-http, default)
    MCP_TRANSPORT=stdio python server.py
"""

import logging

import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import ValidationError
from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from shared.constants import (
    API_KEY_HEADER,
    BASE_URL_HEADER,
    ERROR_MISSING_CREDENTIALS,
    SERVER_NAME,
    SERVER_VERSION,
)
from shared.logging_setup import setup_logger
from tools import register_all
from tools.config import LOG_DIR, LOG_LEVEL, MCP_HOST, MCP_PORT, MCP_TRANSPORT, resolve_credentials
from tools.formatters import format_error

logger = logging.getLogger("shippo_mcp")

# ── MCP Server ──────────────────────────────────


class ShippoMCP(FastMCP):
    """FastMCP whose argument validation failures use the tool error envelope."""

    async def call_tool(self, name, arguments):
        try:
            return await super().call_tool(name, arguments)
        except ToolError as exc:
            if isinstance(exc.__cause__, ValidationError):
                logger.warning("Rejected %s: invalid arguments", name)
                return format_error(exc.__cause__)
            raise


mcp = ShippoMCP(SERVER_NAME, stateless_http=True, host=MCP_HOST, port=MCP_PORT)

# ── Register all tools ──────────────────────────
register_all(mcp)


def tool_names() -> list[str]:
    return [tool.name for tool in mcp._tool_manager.list_tools()]


# ── Plain HTTP routes ───────────────────────────


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "server": SERVER_NAME})


@mcp.custom_route("/", methods=["GET"])
async def info(request: Request) -> JSONResponse:
    return JSONResponse({
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "Shippo multi-carrier shipping API exposed as MCP tools",
        "endpoints": {
            "mcp": f"POST {mcp.settings.streamable_http_path}",
            "health": "GET /health",
        },
        "authentication": {
            "required_headers": {API_KEY_HEADER: "Your Shippo API key"},
            "optional_headers": {BASE_URL_HEADER: "Override the Shippo API base URL"},
        },
        "tools": tool_names(),
    })


# ── Credential gate ─────────────────────────────


class CredentialGate:
    """Reject MCP requests that carry no Shippo API key before they reach the session manager."""

    def __init__(self, app: ASGIApp, mcp_path: str = "/mcp") -> None:
        self.app = app
        self.mcp_path = mcp_path.rstrip("/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].rstrip("/") == self.mcp_path:
            credentials = resolve_credentials(Headers(scope=scope))
            if not credentials.api_key:
                logger.warning("Rejected %s %s: no API key", scope["method"], scope["path"])
                response = JSONResponse(
                    {
                        "error": "Unauthorized",
                        "message": ERROR_MISSING_CREDENTIALS,
                        "required_headers": [API_KEY_HEADER],
                    },
                    status_code=401,
                )
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def create_app() -> ASGIApp:
    """Streamable HTTP app wrapped in the credential gate."""
    return CredentialGate(mcp.streamable_http_app(), mcp.settings.streamable_http_path)


# ── Run ─────────────────────────────────────────


def main() -> None:
    setup_logger("shippo_mcp", LOG_DIR, "shippo_mcp.log", level=LOG_LEVEL)

    if MCP_TRANSPORT == "stdio":
        logger.info("Starting %s v%s on stdio (%d tools)", SERVER_NAME, SERVER_VERSION, len(tool_names()))
        mcp.run(transport="stdio")
        return

    logger.info(
        "Starting %s v%s on http://%s:%d%s (%d tools)",
        SERVER_NAME, SERVER_VERSION, MCP_HOST, MCP_PORT,
        mcp.settings.streamable_http_path, len(tool_names()),
    )
    uvicorn.run(create_app(), host=MCP_HOST, port=MCP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
