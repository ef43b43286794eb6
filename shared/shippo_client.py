"""Credential-scoped Shippo API client, one HTTP call per operation.

Every operation funnels through ``ShippoClient.request``, which injects the
``Authorization`` header, issues exactly one request and classifies the
outcome into a decoded JSON value or a ``ShippoError``.  Nothing is cached
between calls: build one client per tool invocation.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from .constants import (
    AUTH_SCHEME,
    DEFAULT_BASE_URL,
    DEFAULT_RETRY_AFTER_SECONDS,
    ERROR_AUTH_FAILED,
    ERROR_MISSING_CREDENTIALS,
    ERROR_RATE_LIMITED,
)
from .errors import ErrorKind, ShippoError

logger = logging.getLogger("shippo_mcp")

DEFAULT_PARCEL_TEMPLATE_PATH = "/live-rates/settings/parcel-template"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class TenantCredentials:
    """API key and optional base-URL override for a single call."""
    api_key: str | None = None
    base_url: str | None = None


def build_query_string(params: dict[str, Any] | None = None) -> str:
    """Serialize a flat mapping into ``?k=v&...``, skipping ``None`` values.

    Returns an empty string when nothing is left to encode.
    """
    if not params:
        return ""
    query = httpx.QueryParams(
        {key: value for key, value in params.items() if value is not None}
    )
    return f"?{query}" if len(query) else ""


def parse_retry_after(value: str | None) -> int:
    """Seconds from a ``Retry-After`` header, 60 when absent or non-numeric.

    Only the leading integer counts: ``"120.5"`` is 120, ``"1_000"`` is 1.
    """
    match = _LEADING_INT.match(value or "")
    if match is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(match.group(1))


def extract_error_message(response: httpx.Response) -> str:
    """Best-effort human message from an error body.

    Looks at ``detail``, then ``message``, then ``error``; falls back to
    ``"API error: <status>"`` for non-JSON bodies or when none is present.
    """
    fallback = f"API error: {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if not isinstance(payload, dict):
        return fallback

    message = payload.get("detail") or payload.get("message") or payload.get("error")
    if not message:
        return fallback
    return message if isinstance(message, str) else json.dumps(message)


def _without_none(value: Any) -> Any:
    # JSON bodies omit unset optional fields instead of sending null.
    if isinstance(value, dict):
        return {k: _without_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_without_none(v) for v in value]
    return value


class ShippoClient:
    """Client for the Shippo REST API scoped to one set of credentials."""

    def __init__(self, credentials: TenantCredentials, timeout: float = 30):
        self.credentials = credentials
        self.base_url = (credentials.base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

    # ── HTTP pipeline ───────────────────────────────────

    def _auth_headers(self) -> dict[str, str]:
        if not self.credentials.api_key:
            raise ShippoError.authentication(ERROR_MISSING_CREDENTIALS)
        return {
            "Authorization": f"{AUTH_SCHEME} {self.credentials.api_key}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send one request to ``base_url + path`` and decode the result.

        Args:
            path: Endpoint path, already carrying any query string
            method: HTTP verb
            body: JSON-serializable payload (``None`` values are dropped)
            headers: Extra headers; they win over the computed auth headers

        Returns:
            Decoded JSON body, or ``None`` for 204 No Content

        Raises:
            ShippoError: AUTHENTICATION (missing key, 401, 403),
                RATE_LIMIT (429) or API (any other non-2xx)
        """
        request_headers = {**self._auth_headers(), **(headers or {})}
        content = json.dumps(_without_none(body)) if body is not None else None

        logger.debug("Shippo %s %s", method, path)
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.request(
                method,
                f"{self.base_url}{path}",
                headers=request_headers,
                content=content,
            )

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        status = response.status_code

        if status == 429:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            logger.warning("Shippo rate limit hit, retry after %ss", retry_after)
            raise ShippoError.rate_limit(ERROR_RATE_LIMITED, retry_after)

        if status in (401, 403):
            logger.warning("Shippo rejected credentials (HTTP %s)", status)
            raise ShippoError.authentication(ERROR_AUTH_FAILED)

        if not response.is_success:
            message = extract_error_message(response)
            logger.warning("Shippo API error %s: %s", status, message)
            raise ShippoError.api(message, status)

        if status == 204:
            return None

        return response.json()

    # ── Connection ──────────────────────────────────────

    async def test_connection(self) -> dict:
        try:
            await self.request(f"/addresses{build_query_string({'results': 1})}")
            return {"connected": True, "message": "Successfully connected to Shippo API"}
        except Exception as exc:
            return {"connected": False, "message": str(exc) or "Connection failed"}

    # ── Addresses ───────────────────────────────────────

    async def list_addresses(self, params: dict | None = None) -> dict:
        return await self.request(f"/addresses{build_query_string(params)}")

    async def get_address(self, address_id: str) -> dict:
        return await self.request(f"/addresses/{address_id}")

    async def create_address(self, data: dict) -> dict:
        return await self.request("/addresses", method="POST", body=data)

    async def validate_address(self, address_id: str) -> dict:
        return await self.request(f"/addresses/{address_id}/validate")

    # ── Parcels ─────────────────────────────────────────

    async def list_parcels(self, params: dict | None = None) -> dict:
        return await self.request(f"/parcels{build_query_string(params)}")

    async def get_parcel(self, parcel_id: str) -> dict:
        return await self.request(f"/parcels/{parcel_id}")

    async def create_parcel(self, data: dict) -> dict:
        return await self.request("/parcels", method="POST", body=data)

    # ── Shipments ───────────────────────────────────────

    async def list_shipments(self, params: dict | None = None) -> dict:
        return await self.request(f"/shipments{build_query_string(params)}")

    async def get_shipment(self, shipment_id: str) -> dict:
        return await self.request(f"/shipments/{shipment_id}")

    async def create_shipment(self, data: dict) -> dict:
        return await self.request("/shipments", method="POST", body=data)

    # ── Rates ───────────────────────────────────────────

    async def get_rate(self, rate_id: str) -> dict:
        return await self.request(f"/rates/{rate_id}")

    async def list_shipment_rates(self, shipment_id: str, currency: str | None = None) -> dict:
        path = f"/shipments/{shipment_id}/rates"
        if currency:
            path = f"{path}/{currency}"
        return await self.request(path)

    # ── Transactions (labels) ───────────────────────────

    async def list_transactions(self, params: dict | None = None) -> dict:
        return await self.request(f"/transactions{build_query_string(params)}")

    async def get_transaction(self, transaction_id: str) -> dict:
        return await self.request(f"/transactions/{transaction_id}")

    async def create_transaction(self, data: dict) -> dict:
        return await self.request("/transactions", method="POST", body=data)

    async def create_instant_transaction(self, data: dict) -> dict:
        # Same endpoint; the body carries a full shipment instead of a rate id.
        return await self.request("/transactions", method="POST", body=data)

    # ── Tracking ────────────────────────────────────────

    async def get_tracking_status(self, carrier: str, tracking_number: str) -> dict:
        return await self.request(f"/tracks/{carrier}/{tracking_number}")

    async def register_tracking_webhook(self, data: dict) -> dict:
        return await self.request("/tracks", method="POST", body=data)

    # ── Refunds ─────────────────────────────────────────

    async def create_refund(self, data: dict) -> dict:
        return await self.request("/refunds", method="POST", body=data)

    async def get_refund(self, refund_id: str) -> dict:
        return await self.request(f"/refunds/{refund_id}")

    # ── Carrier accounts ────────────────────────────────

    async def list_carrier_accounts(self, params: dict | None = None) -> dict:
        return await self.request(f"/carrier_accounts{build_query_string(params)}")

    async def get_carrier_account(self, account_id: str) -> dict:
        return await self.request(f"/carrier_accounts/{account_id}")

    async def create_carrier_account(self, data: dict) -> dict:
        return await self.request("/carrier_accounts", method="POST", body=data)

    async def update_carrier_account(self, account_id: str, data: dict) -> dict:
        return await self.request(f"/carrier_accounts/{account_id}", method="PUT", body=data)

    # ── Customs ─────────────────────────────────────────

    async def list_customs_items(self, params: dict | None = None) -> dict:
        return await self.request(f"/customs/items{build_query_string(params)}")

    async def get_customs_item(self, item_id: str) -> dict:
        return await self.request(f"/customs/items/{item_id}")

    async def create_customs_item(self, data: dict) -> dict:
        return await self.request("/customs/items", method="POST", body=data)

    async def list_customs_declarations(self, params: dict | None = None) -> dict:
        return await self.request(f"/customs/declarations{build_query_string(params)}")

    async def get_customs_declaration(self, declaration_id: str) -> dict:
        return await self.request(f"/customs/declarations/{declaration_id}")

    async def create_customs_declaration(self, data: dict) -> dict:
        return await self.request("/customs/declarations", method="POST", body=data)

    # ── Manifests ───────────────────────────────────────

    async def list_manifests(self, params: dict | None = None) -> dict:
        return await self.request(f"/manifests{build_query_string(params)}")

    async def get_manifest(self, manifest_id: str) -> dict:
        return await self.request(f"/manifests/{manifest_id}")

    async def create_manifest(self, data: dict) -> dict:
        return await self.request("/manifests", method="POST", body=data)

    # ── Batches ─────────────────────────────────────────

    async def get_batch(self, batch_id: str) -> dict:
        return await self.request(f"/batches/{batch_id}")

    async def create_batch(self, data: dict) -> dict:
        return await self.request("/batches", method="POST", body=data)

    async def add_shipments_to_batch(self, batch_id: str, data: dict) -> dict:
        return await self.request(f"/batches/{batch_id}/add_shipments", method="POST", body=data)

    async def remove_shipments_from_batch(self, batch_id: str, data: dict) -> dict:
        return await self.request(f"/batches/{batch_id}/remove_shipments", method="POST", body=data)

    async def purchase_batch(self, batch_id: str) -> dict:
        return await self.request(f"/batches/{batch_id}/purchase", method="POST")

    # ── Pickups ─────────────────────────────────────────

    async def create_pickup(self, data: dict) -> dict:
        return await self.request("/pickups", method="POST", body=data)

    # ── Orders ──────────────────────────────────────────

    async def list_orders(self, params: dict | None = None) -> dict:
        return await self.request(f"/orders{build_query_string(params)}")

    async def get_order(self, order_id: str) -> dict:
        return await self.request(f"/orders/{order_id}")

    async def create_order(self, data: dict) -> dict:
        return await self.request("/orders", method="POST", body=data)

    # ── Service groups ──────────────────────────────────

    async def list_service_groups(self) -> list[dict]:
        return await self.request("/service-groups")

    async def create_service_group(self, data: dict) -> dict:
        return await self.request("/service-groups", method="POST", body=data)

    async def update_service_group(self, data: dict) -> dict:
        return await self.request("/service-groups", method="PUT", body=data)

    async def delete_service_group(self, group_id: str) -> None:
        await self.request(f"/service-groups/{group_id}", method="DELETE")

    # ── Parcel templates ────────────────────────────────

    async def list_carrier_parcel_templates(self, params: dict | None = None) -> dict:
        return await self.request(f"/parcel-templates{build_query_string(params)}")

    async def get_carrier_parcel_template(self, token: str) -> dict:
        return await self.request(f"/parcel-templates/{token}")

    async def list_user_parcel_templates(self, params: dict | None = None) -> dict:
        return await self.request(f"/user-parcel-templates{build_query_string(params)}")

    async def get_user_parcel_template(self, template_id: str) -> dict:
        return await self.request(f"/user-parcel-templates/{template_id}")

    async def create_user_parcel_template(self, data: dict) -> dict:
        return await self.request("/user-parcel-templates", method="POST", body=data)

    async def delete_user_parcel_template(self, template_id: str) -> None:
        await self.request(f"/user-parcel-templates/{template_id}", method="DELETE")

    # ── Live rates ──────────────────────────────────────

    async def create_live_rate(self, data: dict) -> list[dict]:
        response = await self.request("/live-rates", method="POST", body=data)
        return response["results"]

    async def get_default_parcel_template(self) -> dict | None:
        """Return the configured default template, or ``None`` when unset.

        Only here does a 404 count as a valid outcome; every other failure
        propagates unchanged.
        """
        try:
            return await self.request(DEFAULT_PARCEL_TEMPLATE_PATH)
        except ShippoError as exc:
            if exc.kind is ErrorKind.API and exc.status_code == 404:
                return None
            raise

    async def update_default_parcel_template(self, data: dict) -> dict:
        return await self.request(DEFAULT_PARCEL_TEMPLATE_PATH, method="PUT", body=data)

    async def delete_default_parcel_template(self) -> None:
        await self.request(DEFAULT_PARCEL_TEMPLATE_PATH, method="DELETE")


def create_shippo_client(credentials: TenantCredentials, timeout: float = 30) -> ShippoClient:
    """Build a client for one call's credentials."""
    return ShippoClient(credentials, timeout=timeout)
