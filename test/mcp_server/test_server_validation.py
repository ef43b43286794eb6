"""Tests for server.py: argument validation failures reach callers as error envelopes."""

import json
from unittest.mock import patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from mcp.shared.memory import create_connected_server_and_client_session

import server
from tools import config


@pytest.fixture
def http_transport():
    with patch.object(config, "SHIPPO_API_KEY", "operator_secret"), \
            patch.object(config, "MCP_TRANSPORT", "streamable-http"):
        yield


# ════════════════════════════════════════════════════════════
#  ShippoMCP.call_tool
# ════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_out_of_range_argument_returns_envelope(payload):
    result = await server.mcp.call_tool("shippo_list_addresses", {"results": 500})

    assert result.isError is True
    body = payload(result)
    assert body["details"]["type"] == "validation"
    assert body["details"]["retryable"] is False
    assert body["error"].startswith("Error: Invalid input: results")


@pytest.mark.asyncio
async def test_wrong_type_returns_envelope(payload):
    result = await server.mcp.call_tool("shippo_get_rate", {"id": {"nested": True}})

    assert result.isError is True
    assert payload(result)["details"]["type"] == "validation"


@pytest.mark.asyncio
async def test_unknown_tool_still_raises():
    with pytest.raises(ToolError):
        await server.mcp.call_tool("shippo_no_such_tool", {})


def test_server_is_shippo_mcp():
    assert isinstance(server.mcp, server.ShippoMCP)


# ════════════════════════════════════════════════════════════
#  Through a connected MCP client session
# ════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_session_bad_arguments_get_validation_envelope():
    async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
        result = await session.call_tool("shippo_list_addresses", {"results": 500})

    assert result.isError is True
    body = json.loads(result.content[0].text)
    assert body["details"]["type"] == "validation"
    assert "results" in body["error"]


@pytest.mark.asyncio
async def test_session_without_key_gets_authentication_envelope(http_transport):
    async with create_connected_server_and_client_session(server.mcp._mcp_server) as session:
        with patch("shared.shippo_client.httpx.AsyncClient") as async_client:
            result = await session.call_tool("shippo_list_addresses", {})

    async_client.assert_not_called()
    assert result.isError is True
    body = json.loads(result.content[0].text)
    assert body["details"]["type"] == "authentication"
