"""Service group tools: named bundles of carrier service levels for checkout rates."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import client_for
from .formatters import format_error, format_response, json_result
from .models import ResponseFormat, ServiceGroupType, ServiceLevel, dump

RateAdjustment = Annotated[float | None, Field(ge=-100, le=100, description="Rate adjustment %")]


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_service_groups(
        ctx: Context,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """List all service groups."""
        try:
            groups = await client_for(ctx).list_service_groups()
            # The API returns a bare array; wrap it so tables get a header
            return format_response({"count": len(groups), "results": groups}, format, "service_groups")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_service_group(
        ctx: Context,
        name: str,
        type: ServiceGroupType,
        service_levels: Annotated[list[ServiceLevel], Field(min_length=1)],
        description: str | None = None,
        flat_rate: str | None = None,
        flat_rate_currency: str | None = None,
        free_shipping_threshold_min: str | None = None,
        free_shipping_threshold_currency: str | None = None,
        rate_adjustment: RateAdjustment = None,
        is_active: bool = True,
    ) -> CallToolResult:
        """
        Create a service group.

        Args:
            name: Service group name
            type: LIVE_RATE, FLAT_RATE or FREE_SHIPPING
            service_levels: Carrier account ID + service level token pairs
            description: Description shown at checkout
            flat_rate: Flat rate amount (FLAT_RATE groups)
            flat_rate_currency: Currency of the flat rate
            free_shipping_threshold_min: Order total above which shipping is free
            free_shipping_threshold_currency: Currency of the threshold
            rate_adjustment: Percentage adjustment applied to live rates (-100..100)
            is_active: Whether the group is active
        """
        try:
            group = await client_for(ctx).create_service_group({
                "name": name,
                "description": description,
                "type": type,
                "service_levels": dump(service_levels),
                "flat_rate": flat_rate,
                "flat_rate_currency": flat_rate_currency,
                "free_shipping_threshold_min": free_shipping_threshold_min,
                "free_shipping_threshold_currency": free_shipping_threshold_currency,
                "rate_adjustment": rate_adjustment,
                "is_active": is_active,
            })
            return json_result({
                "success": True,
                "message": "Service group created",
                "group_id": group.get("object_id"),
                "name": group.get("name"),
                "type": group.get("type"),
                "group": group,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_update_service_group(
        ctx: Context,
        object_id: str,
        name: str | None = None,
        description: str | None = None,
        type: ServiceGroupType | None = None,
        service_levels: list[ServiceLevel] | None = None,
        flat_rate: str | None = None,
        flat_rate_currency: str | None = None,
        free_shipping_threshold_min: str | None = None,
        free_shipping_threshold_currency: str | None = None,
        rate_adjustment: RateAdjustment = None,
        is_active: bool | None = None,
    ) -> CallToolResult:
        """
        Update a service group. The object_id travels in the body.

        Args:
            object_id: Service group object ID
        """
        try:
            group = await client_for(ctx).update_service_group({
                "object_id": object_id,
                "name": name,
                "description": description,
                "type": type,
                "service_levels": dump(service_levels),
                "flat_rate": flat_rate,
                "flat_rate_currency": flat_rate_currency,
                "free_shipping_threshold_min": free_shipping_threshold_min,
                "free_shipping_threshold_currency": free_shipping_threshold_currency,
                "rate_adjustment": rate_adjustment,
                "is_active": is_active,
            })
            return json_result({"success": True, "message": "Service group updated", "group": group})
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_delete_service_group(ctx: Context, id: str) -> CallToolResult:
        """Delete a service group by object ID."""
        try:
            await client_for(ctx).delete_service_group(id)
            return json_result({"success": True, "message": f"Service group {id} deleted"})
        except Exception as exc:
            return format_error(exc)
