"""Pickup tools."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import client_for
from .formatters import format_error, format_pickup_as_markdown, json_result, text_result
from .models import PickupLocation, ResponseFormat, dump


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_create_pickup(
        ctx: Context,
        carrier_account: str,
        transactions: Annotated[list[str], Field(min_length=1)],
        requested_start_time: str,
        requested_end_time: str,
        location: PickupLocation,
        is_test: bool | None = None,
        metadata: str | None = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        Schedule a carrier pickup for purchased labels.

        Args:
            carrier_account: Carrier account object ID
            transactions: Transaction IDs to be picked up
            requested_start_time: Earliest pickup time (ISO 8601)
            requested_end_time: Latest pickup time (ISO 8601)
            location: Where the packages wait (building location, address, instructions)
            is_test: Schedule a test pickup
            metadata: Custom metadata string
            format: "json" for a summary, "markdown" for the pickup card

        Returns:
            pickup_id, status and the carrier's confirmation window
        """
        try:
            pickup = await client_for(ctx).create_pickup({
                "carrier_account": carrier_account,
                "transactions": transactions,
                "requested_start_time": requested_start_time,
                "requested_end_time": requested_end_time,
                "location": dump(location),
                "is_test": is_test,
                "metadata": metadata,
            })
            if format == "markdown":
                return text_result(format_pickup_as_markdown(pickup))
            return json_result({
                "success": True,
                "message": "Pickup scheduled",
                "pickup_id": pickup.get("object_id"),
                "status": pickup.get("status"),
                "confirmation_code": pickup.get("confirmation_code"),
                "confirmed_start": pickup.get("confirmed_start_time"),
                "confirmed_end": pickup.get("confirmed_end_time"),
                "pickup": pickup,
            })
        except Exception as exc:
            return format_error(exc)
