"""Parcel tools."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import DistanceUnit, MassUnit, Page, ResponseFormat, Results

Dimension = Annotated[float, Field(gt=0)]


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_parcels(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List parcels from the Shippo account, paginated.

        Args:
            results: Number of parcels to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_parcels({"results": results, "page": page})
            return format_response(data, format, "parcels")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_parcel(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a single parcel by object ID."""
        try:
            parcel = await client_for(ctx).get_parcel(id)
            return format_response(parcel, format, "parcel")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_parcel(
        ctx: Context,
        length: Dimension,
        width: Dimension,
        height: Dimension,
        weight: Dimension,
        distance_unit: DistanceUnit = "in",
        mass_unit: MassUnit = "lb",
        template: str | None = None,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Create a parcel with dimensions and weight.

        Args:
            length: Parcel length
            width: Parcel width
            height: Parcel height
            weight: Parcel weight
            distance_unit: cm, in, ft, mm, m or yd
            mass_unit: g, oz, lb or kg
            template: Carrier parcel template token
            metadata: Custom metadata string
        """
        try:
            parcel = await client_for(ctx).create_parcel({
                "length": length, "width": width, "height": height,
                "distance_unit": distance_unit, "weight": weight,
                "mass_unit": mass_unit, "template": template, "metadata": metadata,
            })
            return json_result({"success": True, "message": "Parcel created", "parcel": parcel})
        except Exception as exc:
            return format_error(exc)
