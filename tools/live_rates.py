"""Live rate tools: checkout rates and the default parcel template behind them."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import client_for
from .formatters import format_error, format_response, json_result
from .models import AddressOrId, LineItem, ParcelOrId, ResponseFormat, dump


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_create_live_rate(
        ctx: Context,
        address_from: AddressOrId,
        address_to: AddressOrId,
        line_items: Annotated[list[LineItem], Field(min_length=1)],
        parcel: ParcelOrId | None = None,
    ) -> CallToolResult:
        """
        Quote checkout shipping rates for a cart of line items.

        Args:
            address_from: Sender address object or ID
            address_to: Recipient address object or ID
            line_items: Items being shipped
            parcel: Parcel object or ID; the default parcel template is used when omitted
        """
        try:
            rates = await client_for(ctx).create_live_rate({
                "address_from": dump(address_from),
                "address_to": dump(address_to),
                "line_items": dump(line_items),
                "parcel": dump(parcel),
            })
            return json_result({"success": True, "rates_count": len(rates), "rates": rates})
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_default_parcel_template(
        ctx: Context,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get the default parcel template used for live rates."""
        try:
            template = await client_for(ctx).get_default_parcel_template()
            if not template:
                return json_result({"message": "No default parcel template set"})
            return format_response(template, format, "default_parcel_template")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_update_default_parcel_template(ctx: Context, object_id: str) -> CallToolResult:
        """
        Set the default parcel template for live rates.

        Args:
            object_id: User parcel template object ID
        """
        try:
            template = await client_for(ctx).update_default_parcel_template({"object_id": object_id})
            return json_result({
                "success": True,
                "message": "Default parcel template updated",
                "template": template,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_delete_default_parcel_template(ctx: Context) -> CallToolResult:
        """Clear the default parcel template for live rates."""
        try:
            await client_for(ctx).delete_default_parcel_template()
            return json_result({"success": True, "message": "Default parcel template cleared"})
        except Exception as exc:
            return format_error(exc)
