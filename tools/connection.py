"""Connection check tool."""

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from .config import client_for
from .formatters import format_error, json_result


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_test_connection(ctx: Context) -> CallToolResult:
        """Test the connection to the Shippo API with the current credentials."""
        try:
            result = await client_for(ctx).test_connection()
            return json_result(result)
        except Exception as exc:
            return format_error(exc)
