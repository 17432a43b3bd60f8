"""Pytest fixtures for Partyman tests."""

import pytest
from asgiref.sync import async_to_sync

from partyman.services import party as party_service
from partyman.services.sync import SecondarySync
from partyman.tests.fakes import FakeBridge, FlakyStore


@pytest.fixture
def store():
    """Store that never fails but records calls."""
    return FlakyStore()


@pytest.fixture
def bridge():
    """Bridge answering with record id FM-1001."""
    return FakeBridge()


@pytest.fixture
def sync(bridge):
    return SecondarySync(bridge, layout="devCustomers")


@pytest.fixture
def prospect_data():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "+1 (555) 010-2000",
        "address_line1": "1 Main St",
        "city": "Springfield",
        "region": "IL",
        "postal_code": "62701",
        "country": "US",
        "industry": "Retail",
    }


@pytest.fixture
def prospect(db, prospect_data):
    """A fully populated prospect."""
    return async_to_sync(party_service.create)(prospect_data)


@pytest.fixture
def bare_prospect(db):
    """A prospect with a name and email only."""
    return async_to_sync(party_service.create)(
        {"first_name": "Ann", "last_name": "Lee", "email": "ann@example.com"}
    )
