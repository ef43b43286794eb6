"""Customs tools for items and declarations on international shipments."""

from typing import Annotated, Literal

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import (
    B13AFilingOption,
    ContentsType,
    CustomsItemInput,
    ExporterIdentification,
    Incoterm,
    InvoicedCharges,
    MassUnit,
    NonDeliveryOption,
    Page,
    ResponseFormat,
    Results,
    dump,
)


def register(mcp: FastMCP) -> None:

    # ── Customs items ─────────────────────────────────

    @mcp.tool()
    async def shippo_list_customs_items(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List customs items.

        Args:
            results: Number of items to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_customs_items({"results": results, "page": page})
            return format_response(data, format, "customs_items")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_customs_item(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a customs item by object ID."""
        try:
            item = await client_for(ctx).get_customs_item(id)
            return format_response(item, format, "customs_item")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_customs_item(
        ctx: Context,
        description: str,
        quantity: Annotated[int, Field(gt=0)],
        net_weight: Annotated[float, Field(gt=0)],
        value_amount: Annotated[float, Field(gt=0)],
        value_currency: Annotated[str, Field(min_length=3, max_length=3)],
        origin_country: Annotated[str, Field(min_length=2, max_length=2)],
        mass_unit: MassUnit = "lb",
        tariff_number: str | None = None,
        sku_code: str | None = None,
        eccn_ear99: str | None = None,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Create a customs item describing one kind of goods in a parcel.

        Args:
            description: Item description
            quantity: Number of units
            net_weight: Net weight per unit
            value_amount: Value per unit
            value_currency: ISO 4217 currency code
            origin_country: ISO country of manufacture
            mass_unit: g, oz, lb or kg
            tariff_number: HS tariff code
            sku_code: SKU code
            eccn_ear99: Export control classification
            metadata: Custom metadata string
        """
        try:
            item = await client_for(ctx).create_customs_item({
                "description": description,
                "quantity": quantity,
                "net_weight": net_weight,
                "mass_unit": mass_unit,
                "value_amount": value_amount,
                "value_currency": value_currency,
                "origin_country": origin_country,
                "tariff_number": tariff_number,
                "sku_code": sku_code,
                "eccn_ear99": eccn_ear99,
                "metadata": metadata,
            })
            return json_result({"success": True, "message": "Customs item created", "item": item})
        except Exception as exc:
            return format_error(exc)

    # ── Customs declarations ──────────────────────────

    @mcp.tool()
    async def shippo_list_customs_declarations(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List customs declarations.

        Args:
            results: Number of declarations to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"
        """
        try:
            data = await client_for(ctx).list_customs_declarations(
                {"results": results, "page": page}
            )
            return format_response(data, format, "customs_declarations")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_customs_declaration(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """Get a customs declaration by object ID."""
        try:
            declaration = await client_for(ctx).get_customs_declaration(id)
            return format_response(declaration, format, "customs_declaration")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_customs_declaration(
        ctx: Context,
        certify: Literal[True],
        certify_signer: str,
        contents_type: ContentsType,
        non_delivery_option: NonDeliveryOption,
        items: Annotated[list[CustomsItemInput | str], Field(min_length=1)],
        contents_explanation: str | None = None,
        exporter_reference: str | None = None,
        importer_reference: str | None = None,
        invoice: str | None = None,
        commercial_invoice: bool | None = None,
        license: str | None = None,
        certificate: str | None = None,
        notes: str | None = None,
        eel_pfc: str | None = None,
        aes_itn: str | None = None,
        incoterm: Incoterm | None = None,
        b13a_filing_option: B13AFilingOption | None = None,
        b13a_number: str | None = None,
        invoiced_charges: InvoicedCharges | None = None,
        exporter_identification: ExporterIdentification | None = None,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Create a customs declaration for an international shipment.

        Args:
            certify: Must be true; certifies the declaration is accurate
            certify_signer: Name of the person certifying
            contents_type: DOCUMENTS, GIFT, SAMPLE, MERCHANDISE, HUMANITARIAN_DONATION, RETURN_MERCHANDISE or OTHER
            non_delivery_option: ABANDON or RETURN
            items: Customs item objects or existing customs item IDs
            contents_explanation: Required when contents_type is OTHER
            incoterm: Trade term (DDP, DDU, ...)
            b13a_filing_option: Canadian B13A filing option
            invoiced_charges: Shipping, tax and duty totals on the invoice
            exporter_identification: EORI number and tax ID of the exporter

        Returns:
            The created declaration, whose object_id is passed to shippo_create_shipment
        """
        try:
            declaration = await client_for(ctx).create_customs_declaration({
                "certify": certify,
                "certify_signer": certify_signer,
                "contents_type": contents_type,
                "non_delivery_option": non_delivery_option,
                "items": dump(items),
                "contents_explanation": contents_explanation,
                "exporter_reference": exporter_reference,
                "importer_reference": importer_reference,
                "invoice": invoice,
                "commercial_invoice": commercial_invoice,
                "license": license,
                "certificate": certificate,
                "notes": notes,
                "eel_pfc": eel_pfc,
                "aes_itn": aes_itn,
                "incoterm": incoterm,
                "b13a_filing_option": b13a_filing_option,
                "b13a_number": b13a_number,
                "invoiced_charges": dump(invoiced_charges),
                "exporter_identification": dump(exporter_identification),
                "metadata": metadata,
            })
            return json_result({
                "success": True,
                "message": "Customs declaration created",
                "declaration": declaration,
            })
        except Exception as exc:
            return format_error(exc)
