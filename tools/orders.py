"""Order tools."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import (
    AddressOrId,
    LineItem,
    MassUnit,
    OrderStatus,
    Page,
    ResponseFormat,
    Results,
    dump,
)


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_orders(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List orders.

        Args:
            results: Number of orders to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_orders({"results": results, "page": page})
            return format_response(data, format, "orders")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_order(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get an order by object ID."""
        try:
            order = await client_for(ctx).get_order(id)
            return format_response(order, format, "order")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_order(
        ctx: Context,
        to_address: AddressOrId,
        line_items: Annotated[list[LineItem], Field(min_length=1)],
        placed_at: str,
        from_address: AddressOrId | None = None,
        order_number: str | None = None,
        order_status: OrderStatus | None = None,
        shipping_cost: str | None = None,
        shipping_cost_currency: str | None = None,
        shipping_method: str | None = None,
        subtotal_price: str | None = None,
        total_price: str | None = None,
        total_tax: str | None = None,
        currency: str | None = None,
        weight: str | None = None,
        weight_unit: MassUnit | None = None,
        notes: str | None = None,
    ) -> CallToolResult:
        """
        Create an order to be fulfilled later with a label.

        Args:
            to_address: Recipient address object or ID
            line_items: Items in the order (at least one)
            placed_at: Order date (ISO 8601)
            from_address: Sender address object or ID
            order_number: Your own order number
            order_status: UNKNOWN, AWAITPAY, PAID, REFUNDED, CANCELLED, PARTIALLY_FULFILLED or SHIPPED
            total_price: Order total, with currency
        """
        try:
            order = await client_for(ctx).create_order({
                "to_address": dump(to_address),
                "from_address": dump(from_address),
                "line_items": dump(line_items),
                "placed_at": placed_at,
                "order_number": order_number,
                "order_status": order_status,
                "shipping_cost": shipping_cost,
                "shipping_cost_currency": shipping_cost_currency,
                "shipping_method": shipping_method,
                "subtotal_price": subtotal_price,
                "total_price": total_price,
                "total_tax": total_tax,
                "currency": currency,
                "weight": weight,
                "weight_unit": weight_unit,
                "notes": notes,
            })
            return json_result({
                "success": True,
                "message": "Order created",
                "order_id": order.get("object_id"),
                "order_number": order.get("order_number"),
                "status": order.get("order_status"),
                "order": order,
            })
        except Exception as exc:
            return format_error(exc)
