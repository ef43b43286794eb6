"""Manifest tools (end-of-day scan forms)."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import Page, ResponseFormat, Results


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_manifests(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List manifests.

        Args:
            results: Number of manifests to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_manifests({"results": results, "page": page})
            return format_response(data, format, "manifests")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_manifest(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a manifest by object ID."""
        try:
            manifest = await client_for(ctx).get_manifest(id)
            return format_response(manifest, format, "manifest")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_manifest(
        ctx: Context,
        carrier_account: str,
        shipment_date: str,
        address_from: str,
        transactions: Annotated[list[str], Field(min_length=1)],
        asynchronous: bool | None = None,
    ) -> CallToolResult:
        """
        Create a manifest so the carrier can scan all labels at pickup.

        Args:
            carrier_account: Carrier account object ID
            shipment_date: Manifest date (ISO 8601)
            address_from: Origin address object ID
            transactions: Transaction IDs to include
            asynchronous: Create the manifest asynchronously (sent as "async")
        """
        try:
            manifest = await client_for(ctx).create_manifest({
                "carrier_account": carrier_account,
                "shipment_date": shipment_date,
                "address_from": address_from,
                "transactions": transactions,
                "async": asynchronous,
            })
            return json_result({
                "success": True,
                "message": "Manifest created",
                "manifest_id": manifest.get("object_id"),
                "status": manifest.get("status"),
                "transactions_count": len(manifest.get("transactions") or []),
                "documents": manifest.get("documents"),
                "manifest": manifest,
            })
        except Exception as exc:
            return format_error(exc)
