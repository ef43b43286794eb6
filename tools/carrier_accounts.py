"""Carrier account tools."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import Page, ResponseFormat, Results


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_carrier_accounts(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List carrier accounts connected to the Shippo account.

        Args:
            results: Number of accounts to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_carrier_accounts({"results": results, "page": page})
            return format_response(data, format, "carrier_accounts")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_carrier_account(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a carrier account by object ID."""
        try:
            account = await client_for(ctx).get_carrier_account(id)
            return format_response(account, format, "carrier_account")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_carrier_account(
        ctx: Context,
        carrier: str,
        account_id: str,
        parameters: dict[str, Any] | None = None,
        active: bool = True,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Connect a carrier account.

        Args:
            carrier: Carrier token (e.g. usps, fedex)
            account_id: Your account ID with the carrier
            parameters: Carrier-specific credentials and settings
            active: Whether the account is active
            metadata: Custom metadata string
        """
        try:
            account = await client_for(ctx).create_carrier_account({
                "carrier": carrier,
                "account_id": account_id,
                "parameters": parameters,
                "active": active,
                "metadata": metadata,
            })
            return json_result({
                "success": True,
                "message": "Carrier account created",
                "account_id": account.get("object_id"),
                "carrier": account.get("carrier"),
                "active": account.get("active"),
                "account": account,
            })
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_update_carrier_account(
        ctx: Context,
        id: str,
        account_id: str | None = None,
        parameters: dict[str, Any] | None = None,
        active: bool | None = None,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Update a carrier account. Only the supplied fields change.

        Args:
            id: Carrier account object ID
            account_id: New account ID with the carrier
            parameters: New carrier-specific parameters
            active: Enable or disable the account
            metadata: New custom metadata string
        """
        try:
            account = await client_for(ctx).update_carrier_account(id, {
                "account_id": account_id,
                "parameters": parameters,
                "active": active,
                "metadata": metadata,
            })
            return json_result({
                "success": True,
                "message": "Carrier account updated",
                "account": account,
            })
        except Exception as exc:
            return format_error(exc)
