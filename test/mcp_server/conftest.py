"""Shared fixtures for mcp_server tests.

Tool modules are registered against a ``_ToolCollector`` instead of a real
FastMCP instance, so their inner functions can be called directly.  The
per-call client factory ``client_for`` is patched in every tool module with
a factory returning one ``AsyncMock(spec=ShippoClient)``; no test touches
the network.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shared.shippo_client import ShippoClient
from tools import (
    addresses as _mod_addresses,
    batches as _mod_batches,
    carrier_accounts as _mod_carrier_accounts,
    connection as _mod_connection,
    customs as _mod_customs,
    live_rates as _mod_live_rates,
    manifests as _mod_manifests,
    orders as _mod_orders,
    parcel_templates as _mod_parcel_templates,
    parcels as _mod_parcels,
    pickups as _mod_pickups,
    rates as _mod_rates,
    refunds as _mod_refunds,
    service_groups as _mod_service_groups,
    shipments as _mod_shipments,
    tracking as _mod_tracking,
    transactions as _mod_transactions,
)

_ALL_MODULES = [
    _mod_addresses, _mod_batches, _mod_carrier_accounts, _mod_connection,
    _mod_customs, _mod_live_rates, _mod_manifests, _mod_orders,
    _mod_parcel_templates, _mod_parcels, _mod_pickups, _mod_rates,
    _mod_refunds, _mod_service_groups, _mod_shipments, _mod_tracking,
    _mod_transactions,
]


# ── Helpers ───────────────────────────────────────────────────────────────


class _ToolCollector:
    """Minimal stand-in for FastMCP that captures tool functions."""

    def __init__(self):
        self.tools: dict[str, callable] = {}

    def tool(self, **kwargs):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn
        return decorator


def _register(collector: _ToolCollector, *modules) -> dict:
    for module in modules:
        module.register(collector)
    return collector.tools


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def tool_collector():
    """Return a fresh _ToolCollector instance."""
    return _ToolCollector()


@pytest.fixture
def mock_client():
    """Patch ``client_for`` in all tool modules; yields the shared client mock."""
    client = AsyncMock(spec=ShippoClient)
    factory = MagicMock(return_value=client)
    patches = [patch.object(mod, "client_for", factory) for mod in _ALL_MODULES]
    for p in patches:
        p.start()
    client.factory = factory
    yield client
    for p in patches:
        p.stop()


@pytest.fixture
def payload():
    """Decode the JSON text of a tool result."""
    def _decode(result):
        assert len(result.content) == 1
        return json.loads(result.content[0].text)
    return _decode


@pytest.fixture
def text():
    """Raw text of a tool result."""
    def _text(result):
        return result.content[0].text
    return _text


# ── Pre-registered tool sets ─────────────────────────────────────────────


@pytest.fixture
def address_tools(tool_collector, mock_client):
    return _register(tool_collector, _mod_addresses)


@pytest.fixture
def shipping_tools(tool_collector, mock_client):
    """Parcels, shipments, rates, labels, tracking and refunds."""
    return _register(
        tool_collector, _mod_parcels, _mod_shipments, _mod_rates,
        _mod_transactions, _mod_tracking, _mod_refunds,
    )


@pytest.fixture
def account_tools(tool_collector, mock_client):
    """Connection check and carrier accounts."""
    return _register(tool_collector, _mod_connection, _mod_carrier_accounts)


@pytest.fixture
def international_tools(tool_collector, mock_client):
    """Customs items and declarations."""
    return _register(tool_collector, _mod_customs)


@pytest.fixture
def operations_tools(tool_collector, mock_client):
    """Manifests, batches and pickups."""
    return _register(tool_collector, _mod_manifests, _mod_batches, _mod_pickups)


@pytest.fixture
def checkout_tools(tool_collector, mock_client):
    """Orders, service groups, parcel templates and live rates."""
    return _register(
        tool_collector, _mod_orders, _mod_service_groups,
        _mod_parcel_templates, _mod_live_rates,
    )


@pytest.fixture
def all_tools(tool_collector, mock_client):
    return _register(tool_collector, *_ALL_MODULES)
