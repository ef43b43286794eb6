"""Response formatting: JSON and Markdown envelopes for tool results.

Every tool returns a ``CallToolResult`` holding one text block.  Success
payloads are pretty-printed JSON or Markdown; failures become a JSON error
envelope with ``isError=True``.
"""

import json
import logging
from typing import Any, Callable

from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from shared.errors import ShippoError, error_details, from_validation_error
from .config import CHARACTER_LIMIT

logger = logging.getLogger("shippo_mcp")

TRUNCATION_NOTICE = "\n\n... [truncated: response exceeded {limit} characters]"


# ── Envelopes ───────────────────────────────────────────


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    if len(text) > CHARACTER_LIMIT:
        text = text[:CHARACTER_LIMIT] + TRUNCATION_NOTICE.format(limit=CHARACTER_LIMIT)
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def json_result(payload: Any) -> CallToolResult:
    """Wrap an arbitrary JSON-serializable payload as a success result."""
    return text_result(to_json(payload))


def format_response(data: Any, format: str, entity_type: str) -> CallToolResult:
    """Render a remote entity (or page of entities) as JSON or Markdown."""
    if format == "markdown":
        return text_result(format_as_markdown(data, entity_type))
    return json_result(data)


def format_error(error: BaseException) -> CallToolResult:
    """Convert any failure into the ``{error, details}`` envelope."""
    if isinstance(error, ValidationError):
        error = from_validation_error(error)

    message = f"Error: {error}" if str(error) else f"Error: {type(error).__name__}"
    if isinstance(error, ShippoError) and error.retryable:
        message += " (retryable)"

    details = error_details(error)
    logger.error("Tool call failed: %s", details)
    return text_result(to_json({"error": message, "details": details}), is_error=True)


# ── Markdown helpers ────────────────────────────────────


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def format_key(key: str) -> str:
    """snake_case -> Title Case."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def _table(headers: list[str], rows: list[list[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(v) for v in row) + " |")
    return "\n".join(lines)


def _dims(item: dict) -> str:
    return (
        f"{item.get('length')}x{item.get('width')}x{item.get('height')} "
        f"{item.get('distance_unit', '')}"
    ).strip()


def _city_state(address: Any) -> str:
    if not isinstance(address, dict):
        return _cell(address)
    return f"{address.get('city', '')}, {address.get('state', '')}"


def _count(value: Any) -> int:
    return len(value) if isinstance(value, (list, tuple)) else 0


# ── Per-entity tables ───────────────────────────────────


def addresses_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Name", "Address", "City", "State", "ZIP", "Country"],
        [
            [a.get("object_id"), a.get("name"), a.get("street1"), a.get("city"),
             a.get("state"), a.get("zip"), a.get("country")]
            for a in items
        ],
    )


def parcels_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Dimensions (LxWxH)", "Weight", "Template"],
        [
            [p.get("object_id"), _dims(p),
             f"{p.get('weight')} {p.get('mass_unit', '')}".strip(), p.get("template")]
            for p in items
        ],
    )


def shipments_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Status", "From", "To", "Parcels", "Rates"],
        [
            [s.get("object_id"), s.get("status"),
             _city_state(s.get("address_from")), _city_state(s.get("address_to")),
             _count(s.get("parcels")), _count(s.get("rates"))]
            for s in items
        ],
    )


def rates_table(items: list[dict]) -> str:
    rows = []
    for r in items:
        servicelevel = r.get("servicelevel") or {}
        rows.append([
            r.get("object_id"), r.get("provider"), servicelevel.get("name"),
            f"{r.get('currency', '')} {r.get('amount', '')}".strip(),
            r.get("estimated_days"),
        ])
    return _table(["ID", "Provider", "Service", "Amount", "Est. Days"], rows)


def transactions_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Status", "Tracking #", "Tracking Status"],
        [
            [t.get("object_id"), t.get("status"), t.get("tracking_number"),
             t.get("tracking_status")]
            for t in items
        ],
    )


def carrier_accounts_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Carrier", "Account ID", "Active"],
        [
            [a.get("object_id"), a.get("carrier"), a.get("account_id"),
             bool(a.get("active"))]
            for a in items
        ],
    )


def customs_items_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Description", "Qty", "Value", "Origin"],
        [
            [i.get("object_id"), i.get("description"), i.get("quantity"),
             f"{i.get('value_currency', '')} {i.get('value_amount', '')}".strip(),
             i.get("origin_country")]
            for i in items
        ],
    )


def customs_declarations_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Contents Type", "Items", "Certify"],
        [
            [d.get("object_id"), d.get("contents_type"), _count(d.get("items")),
             bool(d.get("certify"))]
            for d in items
        ],
    )


def manifests_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Status", "Shipment Date", "Transactions"],
        [
            [m.get("object_id"), m.get("status"), m.get("shipment_date"),
             _count(m.get("transactions"))]
            for m in items
        ],
    )


def orders_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Order #", "Status", "Total", "Items"],
        [
            [o.get("object_id"), o.get("order_number"), o.get("order_status"),
             f"{o.get('currency') or ''} {o.get('total_price') or '-'}".strip(),
             _count(o.get("line_items"))]
            for o in items
        ],
    )


def service_groups_table(items: list[dict]) -> str:
    return _table(
        ["ID", "Name", "Type", "Active", "Services"],
        [
            [g.get("object_id"), g.get("name"), g.get("type"),
             bool(g.get("is_active")), _count(g.get("service_levels"))]
            for g in items
        ],
    )


def carrier_parcel_templates_table(items: list[dict]) -> str:
    return _table(
        ["Token", "Carrier", "Name", "Dimensions"],
        [[t.get("token"), t.get("carrier"), t.get("name"), _dims(t)] for t in items],
    )


def user_parcel_templates_table(items: list[dict]) -> str:
    rows = []
    for t in items:
        weight = f"{t['weight']} {t.get('weight_unit', '')}".strip() if t.get("weight") else None
        rows.append([t.get("object_id"), t.get("name"), _dims(t), weight])
    return _table(["ID", "Name", "Dimensions", "Weight"], rows)


def generic_table(items: list[Any]) -> str:
    """First five keys of the first record as columns."""
    if not items:
        return "_No items_"
    first = items[0] if isinstance(items[0], dict) else {"value": items[0]}
    keys = list(first)[:5]
    rows = []
    for item in items:
        record = item if isinstance(item, dict) else {"value": item}
        rows.append([record.get(k) for k in keys])
    return _table(keys, rows)


TABLE_FORMATTERS: dict[str, Callable[[list[dict]], str]] = {
    "addresses": addresses_table,
    "parcels": parcels_table,
    "shipments": shipments_table,
    "rates": rates_table,
    "transactions": transactions_table,
    "carrier_accounts": carrier_accounts_table,
    "customs_items": customs_items_table,
    "customs_declarations": customs_declarations_table,
    "manifests": manifests_table,
    "orders": orders_table,
    "service_groups": service_groups_table,
    "carrier_parcel_templates": carrier_parcel_templates_table,
    "user_parcel_templates": user_parcel_templates_table,
}


# ── Markdown dispatch ───────────────────────────────────


def is_paginated(data: Any) -> bool:
    return isinstance(data, dict) and isinstance(data.get("results"), list)


def format_as_markdown(data: Any, entity_type: str) -> str:
    if is_paginated(data):
        return format_paginated_as_markdown(data, entity_type)
    if isinstance(data, list):
        return format_list_as_markdown(data, entity_type)
    if isinstance(data, dict):
        return format_object_as_markdown(data, entity_type)
    return str(data)


def format_paginated_as_markdown(data: dict, entity_type: str) -> str:
    results = data["results"]
    lines = [
        f"## {format_key(entity_type)}",
        "",
        f"**Total:** {data.get('count', len(results))} | **Showing:** {len(results)}",
    ]
    if data.get("next"):
        lines.append("**Next page available**")
    lines.append("")

    if not results:
        lines.append("_No items found._")
        return "\n".join(lines)

    formatter = TABLE_FORMATTERS.get(entity_type, generic_table)
    lines.append(formatter(results))
    return "\n".join(lines)


def format_list_as_markdown(items: list, entity_type: str) -> str:
    if entity_type == "rates":
        return rates_table(items)
    if entity_type == "tracking_history":
        return format_tracking_history_as_markdown(items)
    return generic_table(items)


def format_object_as_markdown(data: dict, entity_type: str) -> str:
    lines = [f"## {format_key(entity_type)}", ""]
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            lines.append(f"**{format_key(key)}:**")
            lines.append("```json")
            lines.append(to_json(value))
            lines.append("```")
        else:
            lines.append(f"**{format_key(key)}:** {value}")
    return "\n".join(lines)


# ── Hand-written layouts ────────────────────────────────


def format_tracking_history_as_markdown(events: list[dict]) -> str:
    lines = []
    for event in events:
        status = event.get("tracking_status") or {}
        lines.append(f"### {status.get('status') or 'Unknown'}")
        lines.append(f"**Date:** {_cell(status.get('status_date'))}")
        lines.append(f"**Details:** {_cell(status.get('status_details'))}")
        lines.append("")
    return "\n".join(lines)


def format_tracking_as_markdown(tracking: dict) -> str:
    status = tracking.get("tracking_status") or {}
    lines = [
        f"## Tracking: {tracking.get('tracking_number')}",
        "",
        f"**Carrier:** {tracking.get('carrier')}",
        f"**Current Status:** {status.get('status') or 'Unknown'}",
        f"**Status Details:** {_cell(status.get('status_details'))}",
    ]

    if tracking.get("eta"):
        lines.append(f"**ETA:** {tracking['eta']}")

    address_to = tracking.get("address_to")
    if address_to:
        lines.append(
            f"**Destination:** {address_to.get('city')}, "
            f"{address_to.get('state')} {address_to.get('zip')}"
        )

    history = tracking.get("tracking_history") or []
    if history:
        lines.extend(["", "### Tracking History", ""])
        rows = []
        for event in history:
            location = event.get("location")
            rows.append([
                event.get("status_date"), event.get("status"),
                event.get("status_details"),
                _city_state(location) if location else None,
            ])
        lines.append(_table(["Date", "Status", "Details", "Location"], rows))

    return "\n".join(lines)


def format_refund_as_markdown(refund: dict) -> str:
    return "\n".join([
        f"## Refund: {refund.get('object_id')}",
        "",
        f"**Status:** {refund.get('status')}",
        f"**Transaction:** {refund.get('transaction')}",
        f"**Created:** {refund.get('object_created')}",
    ])


def format_batch_as_markdown(batch: dict) -> str:
    shipments = batch.get("batch_shipments") or {}
    lines = [
        f"## Batch: {batch.get('object_id')}",
        "",
        f"**Status:** {batch.get('status')}",
        f"**Default Carrier:** {batch.get('default_carrier_account')}",
        f"**Default Service:** {batch.get('default_servicelevel_token')}",
        f"**Shipments:** {shipments.get('count', 0)}",
    ]

    label_urls = batch.get("label_url") or []
    if label_urls:
        lines.extend(["", "### Labels"])
        lines.extend(f"- {url}" for url in label_urls)

    return "\n".join(lines)


def format_pickup_as_markdown(pickup: dict) -> str:
    lines = [
        f"## Pickup: {pickup.get('object_id')}",
        "",
        f"**Status:** {pickup.get('status')}",
        f"**Carrier:** {pickup.get('carrier_account')}",
        f"**Requested:** {pickup.get('requested_start_time')} - {pickup.get('requested_end_time')}",
    ]
    if pickup.get("confirmed_start_time"):
        lines.append(
            f"**Confirmed:** {pickup['confirmed_start_time']} - {pickup.get('confirmed_end_time')}"
        )
    if pickup.get("confirmation_code"):
        lines.append(f"**Confirmation Code:** {pickup['confirmation_code']}")
    return "\n".join(lines)
