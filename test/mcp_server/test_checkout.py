"""Tests for order, service group, parcel template and live rate tools."""

import pytest

from shared.errors import ShippoError
from tools.models import LineItem, ServiceLevel


# ════════════════════════════════════════════════════════════
#  Orders
# ════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_create_order(checkout_tools, mock_client, payload):
    mock_client.create_order.return_value = {
        "object_id": "ord_1", "order_number": "#1001", "order_status": "PAID",
    }
    body = payload(await checkout_tools["shippo_create_order"](
        ctx=None, to_address="addr_2", placed_at="2026-10-19T10:00:00Z",
        line_items=[LineItem(title="Mug", quantity=1, total_price="12.00", currency="USD")],
        order_status="PAID",
    ))
    sent = mock_client.create_order.call_args.args[0]
    assert sent["to_address"] == "addr_2"
    assert sent["from_address"] is None
    assert sent["line_items"] == [{"title": "Mug", "quantity": 1, "total_price": "12.00", "currency": "USD"}]
    assert body["order_id"] == "ord_1"
    assert body["status"] == "PAID"


@pytest.mark.asyncio
async def test_list_orders_markdown(checkout_tools, mock_client, text):
    mock_client.list_orders.return_value = {"count": 1, "results": [
        {"object_id": "ord_1", "order_number": "#1001", "order_status": "PAID",
         "total_price": "25.00", "currency": "USD", "line_items": [{}]},
    ]}
    body = text(await checkout_tools["shippo_list_orders"](ctx=None, format="markdown"))
    assert "| ord_1 | #1001 | PAID | USD 25.00 | 1 |" in body


# ════════════════════════════════════════════════════════════
#  Service groups
# ════════════════════════════════════════════════════════════

class TestServiceGroups:

    @pytest.mark.asyncio
    async def test_list_wraps_bare_array(self, checkout_tools, mock_client, payload):
        groups = [{"object_id": "sg_1"}, {"object_id": "sg_2"}]
        mock_client.list_service_groups.return_value = groups
        body = payload(await checkout_tools["shippo_list_service_groups"](ctx=None))
        assert body == {"count": 2, "results": groups}

    @pytest.mark.asyncio
    async def test_list_markdown(self, checkout_tools, mock_client, text):
        mock_client.list_service_groups.return_value = []
        body = text(await checkout_tools["shippo_list_service_groups"](ctx=None, format="markdown"))
        assert "## Service Groups" in body
        assert "**Total:** 0" in body

    @pytest.mark.asyncio
    async def test_create(self, checkout_tools, mock_client, payload):
        mock_client.create_service_group.return_value = {
            "object_id": "sg_1", "name": "Standard", "type": "LIVE_RATE",
        }
        body = payload(await checkout_tools["shippo_create_service_group"](
            ctx=None, name="Standard", type="LIVE_RATE",
            service_levels=[ServiceLevel(account_object_id="ca_1", servicelevel_token="usps_priority")],
            rate_adjustment=15,
        ))
        sent = mock_client.create_service_group.call_args.args[0]
        assert sent["is_active"] is True
        assert sent["service_levels"] == [{"account_object_id": "ca_1", "servicelevel_token": "usps_priority"}]
        assert body["group_id"] == "sg_1"
        assert body["type"] == "LIVE_RATE"

    @pytest.mark.asyncio
    async def test_update_sends_object_id_in_body(self, checkout_tools, mock_client, payload):
        mock_client.update_service_group.return_value = {"object_id": "sg_1", "is_active": False}
        await checkout_tools["shippo_update_service_group"](ctx=None, object_id="sg_1", is_active=False)
        sent = mock_client.update_service_group.call_args.args[0]
        assert sent["object_id"] == "sg_1"
        assert sent["is_active"] is False
        assert sent["service_levels"] is None

    @pytest.mark.asyncio
    async def test_delete(self, checkout_tools, mock_client, payload):
        mock_client.delete_service_group.return_value = None
        body = payload(await checkout_tools["shippo_delete_service_group"](ctx=None, id="sg_1"))
        mock_client.delete_service_group.assert_awaited_once_with("sg_1")
        assert body == {"success": True, "message": "Service group sg_1 deleted"}


# ════════════════════════════════════════════════════════════
#  Parcel templates
# ════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_list_carrier_parcel_templates_filters(checkout_tools, mock_client):
    mock_client.list_carrier_parcel_templates.return_value = {"count": 0, "results": []}
    await checkout_tools["shippo_list_carrier_parcel_templates"](ctx=None, carrier="usps")
    mock_client.list_carrier_parcel_templates.assert_awaited_once_with(
        {"carrier": "usps", "include": None, "results": 20, "page": None}
    )


@pytest.mark.asyncio
async def test_get_carrier_parcel_template_by_token(checkout_tools, mock_client, payload):
    mock_client.get_carrier_parcel_template.return_value = {"token": "USPS_FlatRateEnvelope"}
    body = payload(await checkout_tools["shippo_get_carrier_parcel_template"](
        ctx=None, token="USPS_FlatRateEnvelope",
    ))
    assert body["token"] == "USPS_FlatRateEnvelope"


@pytest.mark.asyncio
async def test_create_user_parcel_template(checkout_tools, mock_client, payload):
    mock_client.create_user_parcel_template.return_value = {"object_id": "upt_1", "name": "Small box"}
    body = payload(await checkout_tools["shippo_create_user_parcel_template"](
        ctx=None, name="Small box", length=6, width=4, height=2,
    ))
    assert mock_client.create_user_parcel_template.call_args.args[0]["distance_unit"] == "in"
    assert body["template_id"] == "upt_1"
    assert body["name"] == "Small box"


@pytest.mark.asyncio
async def test_delete_user_parcel_template(checkout_tools, mock_client, payload):
    body = payload(await checkout_tools["shippo_delete_user_parcel_template"](ctx=None, id="upt_1"))
    assert body["message"] == "User parcel template upt_1 deleted"


# ════════════════════════════════════════════════════════════
#  Live rates
# ════════════════════════════════════════════════════════════

class TestLiveRates:

    @pytest.mark.asyncio
    async def test_create(self, checkout_tools, mock_client, payload):
        mock_client.create_live_rate.return_value = [{"title": "Ground", "amount": "5.00"}]
        body = payload(await checkout_tools["shippo_create_live_rate"](
            ctx=None, address_from="addr_1", address_to="addr_2",
            line_items=[LineItem(title="Mug", quantity=2)],
        ))
        sent = mock_client.create_live_rate.call_args.args[0]
        assert sent["parcel"] is None
        assert sent["line_items"] == [{"title": "Mug", "quantity": 2}]
        assert body == {"success": True, "rates_count": 1, "rates": [{"title": "Ground", "amount": "5.00"}]}

    @pytest.mark.asyncio
    async def test_default_template_unset(self, checkout_tools, mock_client, payload):
        mock_client.get_default_parcel_template.return_value = None
        body = payload(await checkout_tools["shippo_get_default_parcel_template"](ctx=None))
        assert body == {"message": "No default parcel template set"}

    @pytest.mark.asyncio
    async def test_default_template_markdown(self, checkout_tools, mock_client, text):
        mock_client.get_default_parcel_template.return_value = {"result": {"object_id": "upt_1"}}
        body = text(await checkout_tools["shippo_get_default_parcel_template"](ctx=None, format="markdown"))
        assert body.startswith("## Default Parcel Template")

    @pytest.mark.asyncio
    async def test_update_default_template(self, checkout_tools, mock_client, payload):
        mock_client.update_default_parcel_template.return_value = {"result": {"object_id": "upt_1"}}
        body = payload(await checkout_tools["shippo_update_default_parcel_template"](ctx=None, object_id="upt_1"))
        mock_client.update_default_parcel_template.assert_awaited_once_with({"object_id": "upt_1"})
        assert body["message"] == "Default parcel template updated"

    @pytest.mark.asyncio
    async def test_clear_default_template(self, checkout_tools, mock_client, payload):
        body = payload(await checkout_tools["shippo_delete_default_parcel_template"](ctx=None))
        assert body == {"success": True, "message": "Default parcel template cleared"}

    @pytest.mark.asyncio
    async def test_live_rate_error(self, checkout_tools, mock_client, payload):
        mock_client.create_live_rate.side_effect = ShippoError.api("No default parcel template", 400)
        result = await checkout_tools["shippo_create_live_rate"](
            ctx=None, address_from="addr_1", address_to="addr_2",
            line_items=[LineItem(title="Mug", quantity=2)],
        )
        assert result.isError is True
