"""Parcel template tools: carrier presets and user-defined templates."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import DistanceUnit, MassUnit, Page, ResponseFormat, Results

Dimension = Annotated[float, Field(gt=0)]


def register(mcp: FastMCP) -> None:

    # ── Carrier templates (read-only) ─────────────────

    @mcp.tool()
    async def shippo_list_carrier_parcel_templates(
        ctx: Context,
        carrier: str | None = None,
        include: str | None = None,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List carrier parcel templates (flat-rate boxes, envelopes, ...).

        Args:
            carrier: Only templates of this carrier
            include: Comma-separated carrier filter
            results: Number of templates to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_carrier_parcel_templates({
                "carrier": carrier,
                "include": include,
                "results": results,
                "page": page,
            })
            return format_response(data, format, "carrier_parcel_templates")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_carrier_parcel_template(
        ctx: Context,
        token: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a carrier parcel template by token."""
        try:
            template = await client_for(ctx).get_carrier_parcel_template(token)
            return format_response(template, format, "carrier_parcel_template")
        except Exception as exc:
            return format_error(exc)

    # ── User templates ────────────────────────────────

    @mcp.tool()
    async def shippo_list_user_parcel_templates(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """List user-defined parcel templates."""
        try:
            data = await client_for(ctx).list_user_parcel_templates({"results": results, "page": page})
            return format_response(data, format, "user_parcel_templates")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_user_parcel_template(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a user parcel template by object ID."""
        try:
            template = await client_for(ctx).get_user_parcel_template(id)
            return format_response(template, format, "user_parcel_template")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_user_parcel_template(
        ctx: Context,
        name: str,
        length: Dimension,
        width: Dimension,
        height: Dimension,
        distance_unit: DistanceUnit = "in",
        weight: Annotated[float | None, Field(gt=0)] = None,
        weight_unit: MassUnit | None = None,
        template: str | None = None,
    ) -> CallToolResult:
        """
        Create a reusable parcel template.

        Args:
            name: Template name
            length: Length
            width: Width
            height: Height
            distance_unit: cm, in, ft, mm, m or yd
            weight: Default weight
            weight_unit: g, oz, lb or kg
            template: Carrier template token to base this one on
        """
        try:
            created = await client_for(ctx).create_user_parcel_template({
                "name": name,
                "length": length,
                "width": width,
                "height": height,
                "distance_unit": distance_unit,
                "weight": weight,
                "weight_unit": weight_unit,
                "template": template,
            })
            return json_result({
                "success": True,
                "message": "User parcel template created",
                "template_id": created.get("object_id"),
                "name": created.get("name"),
                "template": created,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_delete_user_parcel_template(ctx: Context, id: str) -> CallToolResult:
        """Delete a user parcel template by object ID."""
        try:
            await client_for(ctx).delete_user_parcel_template(id)
            return json_result({"success": True, "message": f"User parcel template {id} deleted"})
        except Exception as exc:
            return format_error(exc)
