"""Tests for the read-side fold."""

import logging
import uuid
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from partyman.models import ChannelKind, ContactChannel, Party, PartyAttribute, PartyKind
from partyman.services import party as party_service
from partyman.services.assembler import assemble, fetch, list_parties


get = async_to_sync(fetch)
list_all = async_to_sync(list_parties)


def _party_row(**kwargs):
    row = {
        "id": uuid.uuid4(),
        "name": "Jane Doe",
        "kind": "PROSPECT",
        "first_name": "Jane",
        "last_name": "Doe",
        "secondary_ref": "",
        "is_active": True,
        "created_at": None,
        "updated_at": None,
    }
    row.update(kwargs)
    return row


def _channel(kind, value, is_primary=True):
    return {"kind": kind, "value": value, "is_primary": is_primary}


class TestAssemble:
    """Pure fold, no storage."""

    def test_empty_collections(self):
        view = assemble(_party_row(), [], [], [])
        assert view.email == ""
        assert view.phone == ""
        assert view.city == ""
        assert view.attributes == {}
        assert view.is_prospect

    def test_first_primary_per_kind_wins(self, caplog):
        channels = [
            _channel("EMAIL", "old@example.com"),
            _channel("EMAIL", "new@example.com"),
            _channel("PHONE", "555 0100", is_primary=False),
            _channel("PHONE", "555 0200"),
        ]
        with caplog.at_level(logging.WARNING, logger="partyman.services.assembler"):
            view = assemble(_party_row(), channels, [], [])

        assert view.email == "old@example.com"
        assert view.phone == "555 0200"
        assert "several primary EMAIL channels" in caplog.text

    def test_non_primary_only_is_empty(self):
        view = assemble(_party_row(), [_channel("EMAIL", "x@example.com", is_primary=False)], [], [])
        assert view.email == ""

    def test_first_address_used(self):
        addresses = [
            {"line1": "1 Main St", "line2": "", "city": "Springfield", "region": "IL",
             "postal_code": "62701", "country": "US"},
            {"line1": "2 Elm St", "line2": "", "city": "Shelbyville", "region": "IL",
             "postal_code": "", "country": "US"},
        ]
        view = assemble(_party_row(), [], addresses, [])
        assert view.address_line1 == "1 Main St"
        assert view.city == "Springfield"

    def test_attributes_and_convenience_category(self):
        attributes = [
            {"category": "industry", "value": "Retail"},
            {"category": "source", "value": "fair"},
        ]
        view = assemble(_party_row(), [], [], attributes)
        assert view.industry == "Retail"
        assert view.attributes == {"industry": "Retail", "source": "fair"}

    def test_convenience_category_setting(self, settings):
        settings.PARTYMAN = {"CONVENIENCE_CATEGORY": "source"}
        attributes = [
            {"category": "industry", "value": "Retail"},
            {"category": "source", "value": "fair"},
        ]
        assert assemble(_party_row(), [], [], attributes).industry == "fair"


@pytest.mark.django_db
class TestFetch:
    def test_unknown_party(self):
        assert get(uuid.uuid4()) is None

    def test_multiple_primaries_in_store(self, bare_prospect):
        """Two primary emails in storage still yield one email, the oldest."""
        extra = ContactChannel.objects.create(
            party_id=bare_prospect.id,
            kind=ChannelKind.EMAIL,
            value="dup@example.com",
            is_primary=True,
        )
        ContactChannel.objects.filter(pk=extra.pk).update(
            created_at=timezone.now() + timedelta(minutes=5)
        )

        view = get(bare_prospect.id)

        assert view.email == "ann@example.com"

    def test_secondary_ref_exposed(self, bare_prospect):
        Party.objects.filter(pk=bare_prospect.id).update(
            kind=PartyKind.CUSTOMER, secondary_ref="FM-7"
        )
        view = get(bare_prospect.id)
        assert view.secondary_ref == "FM-7"
        assert not view.is_prospect

    def test_attribute_rows(self, bare_prospect):
        PartyAttribute.objects.create(party_id=bare_prospect.id, category="industry", value="Tech")
        assert get(bare_prospect.id).industry == "Tech"


@pytest.mark.django_db
class TestListParties:
    def test_filters_by_kind_and_activity(self, prospect, bare_prospect):
        create = async_to_sync(party_service.create)
        customer = create(
            {"first_name": "Cal", "email": "cal@example.com"}, kind=PartyKind.CUSTOMER
        )
        Party.objects.filter(pk=bare_prospect.id).update(is_active=False)

        assert [v.id for v in list_all(kind=PartyKind.PROSPECT)] == [prospect.id]
        assert {v.id for v in list_all(kind=PartyKind.PROSPECT, only_active=False)} == {
            prospect.id,
            bare_prospect.id,
        }
        assert [v.id for v in list_all(kind=PartyKind.CUSTOMER)] == [customer.id]
        assert len(list_all()) == 2
