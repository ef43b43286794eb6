"""Tests for the connection check and carrier account tools."""

import pytest

from shared.errors import ShippoError


@pytest.mark.asyncio
async def test_connection_ok(account_tools, mock_client, payload):
    mock_client.test_connection.return_value = {
        "connected": True, "message": "Successfully connected to Shippo API",
    }
    result = await account_tools["shippo_test_connection"](ctx=None)
    assert result.isError is False
    assert payload(result)["connected"] is True


@pytest.mark.asyncio
async def test_connection_failure_is_reported_not_raised(account_tools, mock_client, payload):
    mock_client.test_connection.return_value = {
        "connected": False, "message": "Authentication failed. Check your Shippo API key.",
    }
    body = payload(await account_tools["shippo_test_connection"](ctx=None))
    assert body["connected"] is False
    assert "API key" in body["message"]


class TestCarrierAccounts:

    @pytest.mark.asyncio
    async def test_list_markdown(self, account_tools, mock_client, text):
        mock_client.list_carrier_accounts.return_value = {"count": 1, "results": [
            {"object_id": "ca_1", "carrier": "usps", "account_id": "shippo_usps", "active": True},
        ]}
        body = text(await account_tools["shippo_list_carrier_accounts"](ctx=None, format="markdown"))
        mock_client.list_carrier_accounts.assert_awaited_once_with({"results": 20, "page": None})
        assert "## Carrier Accounts" in body
        assert "| ca_1 | usps | shippo_usps | Yes |" in body

    @pytest.mark.asyncio
    async def test_create(self, account_tools, mock_client, payload):
        mock_client.create_carrier_account.return_value = {
            "object_id": "ca_2", "carrier": "fedex", "active": True,
        }
        body = payload(await account_tools["shippo_create_carrier_account"](
            ctx=None, carrier="fedex", account_id="123456", parameters={"meter": "99"},
        ))
        sent = mock_client.create_carrier_account.call_args.args[0]
        assert sent["active"] is True
        assert sent["parameters"] == {"meter": "99"}
        assert body["account_id"] == "ca_2"
        assert body["carrier"] == "fedex"

    @pytest.mark.asyncio
    async def test_update_passes_id_and_changes(self, account_tools, mock_client, payload):
        mock_client.update_carrier_account.return_value = {"object_id": "ca_1", "active": False}
        body = payload(await account_tools["shippo_update_carrier_account"](
            ctx=None, id="ca_1", active=False,
        ))
        args = mock_client.update_carrier_account.call_args.args
        assert args[0] == "ca_1"
        assert args[1]["active"] is False
        assert body["message"] == "Carrier account updated"

    @pytest.mark.asyncio
    async def test_get_forbidden(self, account_tools, mock_client, payload):
        mock_client.get_carrier_account.side_effect = ShippoError.authentication(
            "Authentication failed. Check your Shippo API key."
        )
        result = await account_tools["shippo_get_carrier_account"](ctx=None, id="ca_1")
        assert result.isError is True
        details = payload(result)["details"]
        assert details["type"] == "authentication"
        assert details["retryable"] is False
