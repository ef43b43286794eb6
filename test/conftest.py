"""Root conftest.py: shared fixtures for the entire test suite."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

# ---------------------------------------------------------------------------
# Make project modules importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# ---------------------------------------------------------------------------
# Common fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_async_client():
    """Factory for a mocked ``httpx.AsyncClient`` answering every request with ``response``."""
    def _make(response: httpx.Response):
        instance = AsyncMock()
        instance.request.return_value = response
        instance.__aenter__ = AsyncMock(return_value=instance)
        instance.__aexit__ = AsyncMock(return_value=False)
        return instance
    return _make


@pytest.fixture
def sample_address():
    """Realistic Shippo address record."""
    return {
        "object_id": "addr_123",
        "is_complete": True,
        "name": "Shawn Ippotle",
        "company": "Shippo",
        "street1": "215 Clayton St.",
        "city": "San Francisco",
        "state": "CA",
        "zip": "94117",
        "country": "US",
        "phone": "+1 555 341 9393",
        "email": "shippotle@shippo.com",
        "validation_results": {"is_valid": True, "messages": []},
    }


@pytest.fixture
def sample_address_page(sample_address):
    """Paginated list of addresses as Shippo returns it."""
    return {
        "count": 2,
        "next": "https://api.goshippo.com/addresses?page=2",
        "previous": None,
        "results": [
            sample_address,
            {
                "object_id": "addr_456",
                "name": "Mr Hippo",
                "street1": "965 Mission St",
                "city": "San Francisco",
                "state": "CA",
                "zip": "94103",
                "country": "US",
            },
        ],
    }


@pytest.fixture
def sample_shipment():
    """Shipment with two rates."""
    return {
        "object_id": "shp_789",
        "status": "SUCCESS",
        "address_from": {"city": "San Francisco", "state": "CA"},
        "address_to": {"city": "New York", "state": "NY"},
        "parcels": [{"object_id": "prc_1"}],
        "rates": [
            {
                "object_id": "rate_1", "provider": "USPS", "amount": "7.50",
                "currency": "USD", "estimated_days": 2,
                "servicelevel": {"name": "Priority Mail", "token": "usps_priority"},
            },
            {
                "object_id": "rate_2", "provider": "UPS", "amount": "12.10",
                "currency": "USD", "estimated_days": 1,
                "servicelevel": {"name": "Next Day Air", "token": "ups_next_day_air"},
            },
        ],
    }


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the Shippo env fallbacks to safe test values."""
    monkeypatch.setenv("SHIPPO_API_KEY", "shippo_test_env_key")
    monkeypatch.setenv("SHIPPO_BASE_URL", "https://sandbox.example.com")
    monkeypatch.setenv("SHIPPO_TIMEOUT", "15")
    monkeypatch.setenv("LOG_LEVEL", "debug")
