"""MCP Tools package: registers all Shippo tools with the MCP server."""

from mcp.server.fastmcp import FastMCP

from . import (
    addresses,
    batches,
    carrier_accounts,
    connection,
    customs,
    live_rates,
    manifests,
    orders,
    parcel_templates,
    parcels,
    pickups,
    rates,
    refunds,
    service_groups,
    shipments,
    tracking,
    transactions,
)

TOOL_MODULES = (
    connection,
    addresses,
    parcels,
    shipments,
    rates,
    transactions,
    tracking,
    refunds,
    carrier_accounts,
    customs,
    manifests,
    batches,
    pickups,
    orders,
    service_groups,
    parcel_templates,
    live_rates,
)


def register_all(mcp: FastMCP) -> None:
    """Register every tool module with the given MCP server instance."""
    for module in TOOL_MODULES:
        module.register(mcp)
