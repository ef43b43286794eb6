"""Batch tools: buy up to 100 labels at once."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import client_for
from .formatters import format_batch_as_markdown, format_error, json_result, text_result
from .models import BatchShipment, LabelFileType, ResponseFormat, dump

BatchShipments = Annotated[list[BatchShipment], Field(min_length=1, max_length=100)]


def _shipments_count(batch: dict) -> int | None:
    return (batch.get("batch_shipments") or {}).get("count")


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_get_batch(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a batch, its status and its shipments."""
        try:
            batch = await client_for(ctx).get_batch(id)
            if format == "markdown":
                return text_result(format_batch_as_markdown(batch))
            return json_result(batch)
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_batch(
        ctx: Context,
        default_carrier_account: str,
        default_servicelevel_token: str,
        batch_shipments: BatchShipments,
        label_file_type: LabelFileType = "PDF_4x6",
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Create a batch of shipments sharing a default carrier and service level.

        Args:
            default_carrier_account: Default carrier account ID
            default_servicelevel_token: Default service level token
            batch_shipments: 1-100 shipments, each optionally overriding carrier/service
            label_file_type: Label file format (default PDF_4x6)
            metadata: Custom metadata string
        """
        try:
            batch = await client_for(ctx).create_batch({
                "default_carrier_account": default_carrier_account,
                "default_servicelevel_token": default_servicelevel_token,
                "label_file_type": label_file_type,
                "batch_shipments": dump(batch_shipments),
                "metadata": metadata,
            })
            return json_result({
                "success": True,
                "message": "Batch created",
                "batch_id": batch.get("object_id"),
                "status": batch.get("status"),
                "shipments_count": _shipments_count(batch),
                "batch": batch,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_add_shipments_to_batch(
        ctx: Context,
        batch_id: str,
        shipments: BatchShipments,
    ) -> CallToolResult:
        """
        Add shipments to an existing batch.

        Args:
            batch_id: Batch object ID
            shipments: 1-100 shipments to add
        """
        try:
            batch = await client_for(ctx).add_shipments_to_batch(
                batch_id, {"shipments": dump(shipments)}
            )
            return json_result({
                "success": True,
                "message": "Shipments added to batch",
                "batch_id": batch.get("object_id"),
                "status": batch.get("status"),
                "shipments_count": _shipments_count(batch),
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_remove_shipments_from_batch(
        ctx: Context,
        batch_id: str,
        shipment_ids: Annotated[list[str], Field(min_length=1)],
    ) -> CallToolResult:
        """
        Remove shipments from a batch.

        Args:
            batch_id: Batch object ID
            shipment_ids: Batch shipment IDs to remove
        """
        try:
            batch = await client_for(ctx).remove_shipments_from_batch(
                batch_id, {"shipment_ids": shipment_ids}
            )
            return json_result({
                "success": True,
                "message": "Shipments removed from batch",
                "batch_id": batch.get("object_id"),
                "status": batch.get("status"),
                "shipments_count": _shipments_count(batch),
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_purchase_batch(ctx: Context, batch_id: str) -> CallToolResult:
        """
        Purchase labels for every shipment in a batch. Runs asynchronously on
        Shippo's side; poll shippo_get_batch until the status is PURCHASED.

        Args:
            batch_id: Batch object ID
        """
        try:
            batch = await client_for(ctx).purchase_batch(batch_id)
            return json_result({
                "success": True,
                "message": "Batch purchase initiated",
                "batch_id": batch.get("object_id"),
                "status": batch.get("status"),
                "label_url": batch.get("label_url"),
                "batch": batch,
            })
        except Exception as exc:
            return format_error(exc)
