"""Rate tools."""

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from .config import client_for
from .formatters import format_error, format_response
from .models import ResponseFormat


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_get_rate(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a single rate by object ID."""
        try:
            rate = await client_for(ctx).get_rate(id)
            return format_response(rate, format, "rate")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_list_shipment_rates(
        ctx: Context,
        shipment_id: str,
        currency: str | None = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List the carrier rates available for a shipment.

        Args:
            shipment_id: Shipment object ID
            currency: ISO currency code to convert amounts into (e.g. USD)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_shipment_rates(shipment_id, currency)
            return format_response(data, format, "rates")
        except Exception as exc:
            return format_error(exc)
