"""Transaction tools for purchasing shipping labels."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import (
    AddressOrId,
    LabelFileType,
    Page,
    ParcelOrId,
    ResponseFormat,
    Results,
    dump,
)


def _label_summary(transaction: dict) -> dict:
    return {
        "success": True,
        "message": "Label purchased",
        "transaction_id": transaction.get("object_id"),
        "status": transaction.get("status"),
        "tracking_number": transaction.get("tracking_number"),
        "tracking_url": transaction.get("tracking_url_provider"),
        "label_url": transaction.get("label_url"),
        "transaction": transaction,
    }


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_transactions(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List label transactions with their status and tracking numbers.

        Args:
            results: Number of transactions to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_transactions({"results": results, "page": page})
            return format_response(data, format, "transactions")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_transaction(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a single transaction (label) by object ID."""
        try:
            transaction = await client_for(ctx).get_transaction(id)
            return format_response(transaction, format, "transaction")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_transaction(
        ctx: Context,
        rate: str,
        label_file_type: LabelFileType = "PDF_4x6",
        metadata: str | None = None,
        asynchronous: bool | None = None,
    ) -> CallToolResult:
        """
        Purchase a shipping label for a rate.

        Args:
            rate: Rate object ID to purchase
            label_file_type: Label file format (default PDF_4x6)
            metadata: Custom metadata string
            asynchronous: Create the label asynchronously (sent as "async")

        Returns:
            Summary with transaction_id, tracking number and label URL
        """
        try:
            transaction = await client_for(ctx).create_transaction({
                "rate": rate,
                "label_file_type": label_file_type,
                "metadata": metadata,
                "async": asynchronous,
            })
            return json_result(_label_summary(transaction))
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_instant_transaction(
        ctx: Context,
        address_from: AddressOrId,
        address_to: AddressOrId,
        parcels: Annotated[list[ParcelOrId], Field(min_length=1)],
        carrier_account: str,
        servicelevel_token: str,
        label_file_type: LabelFileType = "PDF_4x6",
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Purchase a label in one call, without creating a shipment first.

        Args:
            address_from: Sender address object or existing address ID
            address_to: Recipient address object or existing address ID
            parcels: Parcel objects or existing parcel IDs
            carrier_account: Carrier account object ID
            servicelevel_token: Service level token (e.g. usps_priority)
            label_file_type: Label file format (default PDF_4x6)
            metadata: Custom metadata string
        """
        try:
            transaction = await client_for(ctx).create_instant_transaction({
                "shipment": {
                    "address_from": dump(address_from),
                    "address_to": dump(address_to),
                    "parcels": dump(parcels),
                },
                "carrier_account": carrier_account,
                "servicelevel_token": servicelevel_token,
                "label_file_type": label_file_type,
                "metadata": metadata,
            })
            return json_result(_label_summary(transaction))
        except Exception as exc:
            return format_error(exc)
