"""Address tools: saved addresses and address validation."""

from typing import Annotated

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import DEFAULT_PAGE_SIZE, client_for
from .formatters import format_error, format_response, json_result
from .models import Page, ResponseFormat, Results


def register(mcp: FastMCP) -> None:

    @mcp.tool()
    async def shippo_list_addresses(
        ctx: Context,
        results: Results = DEFAULT_PAGE_SIZE,
        page: Page = None,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        List saved addresses from the Shippo account, paginated.

        Args:
            results: Number of addresses to return (1-100)
            page: Page number (1-indexed)
            format: "json" or "markdown"

        Returns:
            Paginated list with name, street, city, state, zip and country
        """
        try:
            data = await client_for(ctx).list_addresses({"results": results, "page": page})
            return format_response(data, format, "addresses")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_get_address(
        ctx: Context,
        id: str,
        format: ResponseFormat = "json",
    ) -> CallToolResult:
        """
        Get a single address by object ID, including validation results.

        Args:
            id: Address object ID
            format: "json" or "markdown"
        """
        try:
            address = await client_for(ctx).get_address(id)
            return format_response(address, format, "address")
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_create_address(
        ctx: Context,
        name: str,
        street1: str,
        city: str,
        state: str,
        zip: str,
        country: Annotated[str, Field(min_length=2, max_length=2)],
        company: str | None = None,
        street2: str | None = None,
        street3: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        is_residential: bool | None = None,
        validate: bool | None = None,
        metadata: str | None = None,
    ) -> CallToolResult:
        """
        Create a new address in Shippo.

        Args:
            name: Recipient name
            street1: Street address line 1
            city: City
            state: State/province code
            zip: Postal/ZIP code
            country: ISO 2-letter country code
            company: Company name
            street2: Street address line 2
            street3: Street address line 3
            phone: Phone number
            email: Email address
            is_residential: Whether the address is residential
            validate: Validate the address on creation
            metadata: Custom metadata string

        Returns:
            The created address, whose object_id can be reused by other tools
        """
        try:
            address = await client_for(ctx).create_address({
                "name": name, "street1": street1, "city": city, "state": state,
                "zip": zip, "country": country, "company": company,
                "street2": street2, "street3": street3, "phone": phone,
                "email": email, "is_residential": is_residential,
                "validate": validate, "metadata": metadata,
            })
            return json_result({"success": True, "message": "Address created", "address": address})
        except Exception as exc:
            return format_error(exc)

    @mcp.tool()
    async def shippo_validate_address(ctx: Context, id: str) -> CallToolResult:
        """
        Validate an existing address by object ID.

        Args:
            id: Address object ID to validate

        Returns:
            is_valid flag plus the validation messages and the address record
        """
        try:
            address = await client_for(ctx).validate_address(id)
            validation = address.get("validation_results")
            return json_result({
                "success": True,
                "is_valid": bool((validation or {}).get("is_valid", False)),
                "validation_results": validation,
                "address": address,
            })
        except Exception as exc:
            return format_error(exc)
