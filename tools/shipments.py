"""Shipment tools. Creating a shipment fetches carrier rates."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import AddressOrId, Page, ParcelOrId, ResponseFormat, Results, ShipmentExtra, dump


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_shipments(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List shipments with their status, addresses and rates.

        Args:
            results: Number of shipments to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_shipments({"results": results, "page": page})
            return format_response(data, format, "shipments")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_shipment(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a single shipment by object ID, with parcels and rates."""
        try:
            shipment = await client_for(ctx).get_shipment(id)
            return format_response(shipment, format, "shipment")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_shipment(
        ctx: Context,
        address_from: AddressOrId,
        address_to: AddressOrId,
        parcels: Annotated[list[ParcelOrId], Field(min_length=1)],
        address_return: AddressOrId | None = None,
        shipment_date: str | None = None,
        customs_declaration: str | None = None,
        carrier_accounts: list[str] | None = None,
        extra: ShipmentExtra | None = None,
        metadata: str | None = None,
        asynchronous: bool | None = None,
    ) -> CallToolResult:
        """
        Create a shipment between two addresses and fetch carrier rates.

        Args:
            address_from: Sender address object or existing address ID
            address_to: Recipient address object or existing address ID
            parcels: Parcel objects or existing parcel IDs (at least one)
            address_return: Return address object or ID
            shipment_date: Date the shipment is tendered to the carrier (ISO 8601)
            customs_declaration: Customs declaration ID for international shipments
            carrier_accounts: Carrier account IDs to request rates from
            extra: Signature, insurance, COD and other options
            metadata: Custom metadata string
            asynchronous: Fetch rates asynchronously (sent as "async")

        Returns:
            Summary with shipment_id, status and rates_count plus the shipment
        """
        try:
            shipment = await client_for(ctx).create_shipment({
                "address_from": dump(address_from),
                "address_to": dump(address_to),
                "parcels": dump(parcels),
                "address_return": dump(address_return),
                "shipment_date": shipment_date,
                "customs_declaration": customs_declaration,
                "carrier_accounts": carrier_accounts,
                "extra": dump(extra),
                "metadata": metadata,
                "async": asynchronous,
            })
            return json_result({
                "success": True,
                "message": "Shipment created",
                "shipment_id": shipment.get("object_id"),
                "status": shipment.get("status"),
                "rates_count": len(shipment.get("rates") or []),
                "shipment": shipment,
            })
        except Exception as exc:
            return format_error(exc)
