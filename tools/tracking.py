"""Tracking tools."""

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from .config import client_for
from .formatters import format_error, format_tracking_as_markdown, json_result, text_result
from .models import ResponseFormat


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_get_tracking_status(
        ctx: Context,
        carrier: str,
        tracking_number: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        Get the current tracking status and history of a package.

        Args:
            carrier: Carrier token (e.g. usps, ups, fedex)
            tracking_number: Tracking number
            format: "json" or "markdown"
        """
        try:
            tracking = await client_for(ctx).get_tracking_status(carrier, tracking_number)
            if format == "markdown":
                return text_result(format_tracking_as_markdown(tracking))
            return json_result(tracking)
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_register_tracking_webhook(
        ctx: Context,
        carrier: str,
        tracking_number: str,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Register a tracking number so Shippo sends status updates to the account webhooks.

        Args:
            carrier: Carrier token (e.g. usps, ups, fedex)
            tracking_number: Tracking number
            metadata: Custom metadata string
        """
        try:
            tracking = await client_for(ctx).register_tracking_webhook({
                "carrier": carrier,
                "tracking_number": tracking_number,
                "metadata": metadata,
            })
            status = tracking.get("tracking_status") or {}
            return json_result({
                "success": True,
                "message": "Tracking webhook registered",
                "carrier": carrier,
                "tracking_number": tracking_number,
                "current_status": status.get("status"),
                "tracking": tracking,
            })
        except Exception as exc:
            return format_error(exc)
