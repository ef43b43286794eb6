"""Pydantic models shared across MCP tools."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from .config import MAX_PAGE_SIZE

# ── Common argument types ─────────────────────────────

ResponseFormat = Annotated[
    Literal["json", "markdown"],
    Field(description="Response format"),
]
Results = Annotated[
    int,
    Field(ge=1, le=MAX_PAGE_SIZE, description="Number of records to return"),
]
Page = Annotated[
    int | None,
    Field(ge=1, description="Page number (1-indexed)"),
]

DistanceUnit = Literal["cm", "in", "ft", "mm", "m", "yd"]
MassUnit = Literal["g", "oz", "lb", "kg"]
LabelFileType = Literal[
    "PNG", "PNG_2.3x7.5", "PDF", "PDF_2.3x7.5", "PDF_4x6",
    "PDF_4x8", "PDF_A4", "PDF_A5", "PDF_A6", "ZPLII",
]
ContentsType = Literal[
    "DOCUMENTS", "GIFT", "SAMPLE", "MERCHANDISE",
    "HUMANITARIAN_DONATION", "RETURN_MERCHANDISE", "OTHER",
]
NonDeliveryOption = Literal["ABANDON", "RETURN"]
Incoterm = Literal[
    "DDP", "DDU", "CPT", "CIP", "DAP", "DAT",
    "EXW", "FCA", "FAS", "FOB", "CFR", "CIF",
]
B13AFilingOption = Literal["FILED_ELECTRONICALLY", "SUMMARY_REPORTING", "NOT_REQUIRED"]
OrderStatus = Literal[
    "UNKNOWN", "AWAITPAY", "PAID", "REFUNDED",
    "CANCELLED", "PARTIALLY_FULFILLED", "SHIPPED",
]
ServiceGroupType = Literal["LIVE_RATE", "FLAT_RATE", "FREE_SHIPPING"]
BuildingLocationType = Literal[
    "Front Door", "Back Door", "Side Door", "Knock on Door", "Ring Bell",
    "Mail Room", "Office", "Reception", "In/At Mailbox", "Security Deck",
    "Shipping/Receiving", "Other",
]
BuildingType = Literal["apartment", "building", "department", "floor", "room", "suite"]


# ── Addresses and parcels ─────────────────────────────


class Address(BaseModel):
    """Inline address; most tools also accept an existing address ID."""
    name: str
    street1: str
    city: str
    state: str = Field(description="State/province code")
    zip: str = Field(description="Postal/ZIP code")
    country: str = Field(min_length=2, max_length=2, description="ISO 2-letter country code")
    company: str | None = None
    street2: str | None = None
    street3: str | None = None
    phone: str | None = None
    email: str | None = None
    is_residential: bool | None = None


class Parcel(BaseModel):
    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    distance_unit: DistanceUnit = "in"
    weight: float = Field(gt=0)
    mass_unit: MassUnit = "lb"
    template: str | None = Field(default=None, description="Carrier parcel template token")


AddressOrId = Address | str
ParcelOrId = Parcel | str


# ── Shipment options ──────────────────────────────────


class Insurance(BaseModel):
    amount: str
    currency: str
    content: str


class CashOnDelivery(BaseModel):
    amount: str
    currency: str
    payment_method: Literal["SECURED_FUNDS", "CASH", "ANY"]


class ShipmentExtra(BaseModel):
    """Extra shipment options (signature, insurance, COD, ...)."""
    signature_confirmation: Literal[
        "STANDARD", "ADULT", "CERTIFIED", "INDIRECT", "CARRIER_CONFIRMATION"
    ] | None = None
    authority_to_leave: bool | None = None
    saturday_delivery: bool | None = None
    is_return: bool | None = None
    reference_1: str | None = None
    reference_2: str | None = None
    insurance: Insurance | None = None
    cod: CashOnDelivery | None = None


class ShipmentSpec(BaseModel):
    address_from: AddressOrId
    address_to: AddressOrId
    parcels: list[ParcelOrId] = Field(min_length=1)


class BatchShipment(BaseModel):
    shipment: ShipmentSpec
    carrier_account: str | None = None
    servicelevel_token: str | None = None
    metadata: str | None = None


# ── Orders / live rates ───────────────────────────────


class LineItem(BaseModel):
    title: str
    quantity: int = Field(gt=0)
    variant_title: str | None = None
    sku: str | None = None
    total_price: str | None = None
    currency: str | None = None
    weight: str | None = None
    weight_unit: MassUnit | None = None
    manufacture_country: str | None = None


# ── Customs ───────────────────────────────────────────


class CustomsItemInput(BaseModel):
    description: str
    quantity: int = Field(gt=0)
    net_weight: float = Field(gt=0, description="Net weight per unit")
    mass_unit: MassUnit = "lb"
    value_amount: float = Field(gt=0, description="Value per unit")
    value_currency: str = Field(min_length=3, max_length=3)
    origin_country: str = Field(min_length=2, max_length=2)
    tariff_number: str | None = None


class InvoicedCharges(BaseModel):
    total_shipping: str | None = None
    total_taxes: str | None = None
    total_duties: str | None = None
    other_fees: str | None = None
    currency: str | None = None


class TaxId(BaseModel):
    number: str
    type: Literal["EIN", "VAT", "IOSS", "ARN"]


class ExporterIdentification(BaseModel):
    eori_number: str | None = None
    tax_id: TaxId | None = None


# ── Pickups / service groups ──────────────────────────


class PickupLocation(BaseModel):
    building_location_type: BuildingLocationType
    address: AddressOrId
    building_type: BuildingType | None = None
    instructions: str | None = None


class ServiceLevel(BaseModel):
    account_object_id: str = Field(description="Carrier account ID")
    servicelevel_token: str


def dump(value: Any) -> Any:
    """Models (and lists of them) to plain request-body values, unset fields dropped."""
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, list):
        return [dump(v) for v in value]
    return value
