"""Tests for tools/models.py: tool argument models and request-body dumping."""

import pytest
from pydantic import TypeAdapter, ValidationError

from tools.models import (
    Address,
    AddressOrId,
    BatchShipment,
    CustomsItemInput,
    Page,
    Parcel,
    Results,
    ShipmentExtra,
    ShipmentSpec,
    dump,
)


# ---------------------------------------------------------------------------
# Address / Parcel
# ---------------------------------------------------------------------------

class TestAddress:

    def test_minimal(self):
        addr = Address(name="A", street1="1 Main", city="SF", state="CA", zip="94117", country="US")
        assert addr.company is None

    def test_country_must_be_two_letters(self):
        with pytest.raises(ValidationError):
            Address(name="A", street1="1 Main", city="SF", state="CA", zip="94117", country="USA")

    def test_missing_required(self):
        with pytest.raises(ValidationError) as exc_info:
            Address(name="A", city="SF", state="CA", zip="94117", country="US")
        assert exc_info.value.errors()[0]["loc"] == ("street1",)

    def test_address_or_id_accepts_string(self):
        assert TypeAdapter(AddressOrId).validate_python("addr_123") == "addr_123"


class TestParcel:

    def test_default_units(self):
        parcel = Parcel(length=10, width=8, height=4, weight=2)
        assert parcel.distance_unit == "in"
        assert parcel.mass_unit == "lb"

    def test_dimensions_must_be_positive(self):
        with pytest.raises(ValidationError):
            Parcel(length=0, width=8, height=4, weight=2)

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValidationError):
            Parcel(length=1, width=1, height=1, weight=1, mass_unit="stone")


# ---------------------------------------------------------------------------
# Shipment options
# ---------------------------------------------------------------------------

def test_shipment_extra_signature_values():
    assert ShipmentExtra(signature_confirmation="ADULT").signature_confirmation == "ADULT"
    with pytest.raises(ValidationError):
        ShipmentExtra(signature_confirmation="NOTARIZED")


def test_shipment_spec_needs_a_parcel():
    with pytest.raises(ValidationError):
        ShipmentSpec(address_from="a1", address_to="a2", parcels=[])


def test_customs_item_currency_length():
    with pytest.raises(ValidationError):
        CustomsItemInput(description="Mug", quantity=1, net_weight=1, value_amount=5,
                         value_currency="DOLLARS", origin_country="US")


# ---------------------------------------------------------------------------
# Pagination aliases
# ---------------------------------------------------------------------------

class TestPagination:

    def test_results_bounds(self):
        adapter = TypeAdapter(Results)
        assert adapter.validate_python(100) == 100
        with pytest.raises(ValidationError):
            adapter.validate_python(0)
        with pytest.raises(ValidationError):
            adapter.validate_python(101)

    def test_page_optional(self):
        adapter = TypeAdapter(Page)
        assert adapter.validate_python(None) is None
        with pytest.raises(ValidationError):
            adapter.validate_python(0)


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------

class TestDump:

    def test_model_drops_unset_fields(self):
        addr = Address(name="A", street1="1 Main", city="SF", state="CA", zip="94117", country="US")
        body = dump(addr)
        assert body == {"name": "A", "street1": "1 Main", "city": "SF", "state": "CA",
                        "zip": "94117", "country": "US"}

    def test_list_of_models_and_ids(self):
        body = dump([Parcel(length=1, width=2, height=3, weight=4), "prc_1"])
        assert body[0]["width"] == 2
        assert body[1] == "prc_1"

    def test_nested_models(self):
        batch = BatchShipment(
            shipment=ShipmentSpec(address_from="a1", address_to="a2", parcels=["p1"]),
            servicelevel_token="usps_priority",
        )
        assert dump(batch) == {
            "shipment": {"address_from": "a1", "address_to": "a2", "parcels": ["p1"]},
            "servicelevel_token": "usps_priority",
        }

    def test_plain_values_pass_through(self):
        assert dump(None) is None
        assert dump("addr_1") == "addr_1"
        assert dump({"k": "v"}) == {"k": "v"}
