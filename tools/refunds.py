"""Refund tools."""

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from .config import client_for
from .formatters import format_error, format_refund_as_markdown, json_result, text_result
from .models import ResponseFormat


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_create_refund(
        ctx: Context,
        transaction: str,
        asynchronous: bool | None = None,
    ) -> CallToolResult:
        """
        Request a refund for a purchased label.

        Args:
            transaction: Transaction object ID to refund
            asynchronous: Process the refund asynchronously (sent as "async")
        """
        try:
            refund = await client_for(ctx).create_refund({
                "transaction": transaction,
                "async": asynchronous,
            })
            return json_result({
                "success": True,
                "message": "Refund requested",
                "refund_id": refund.get("object_id"),
                "status": refund.get("status"),
                "refund": refund,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_refund(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a refund by object ID."""
        try:
            refund = await client_for(ctx).get_refund(id)
            if format == "markdown":
                return text_result(format_refund_as_markdown(refund))
            return json_result(refund)
        except Exception as exc:
            return format_error(exc)
