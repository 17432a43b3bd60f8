"""Assembler - folds a party and its child collections into a PartyView.

Read-only. The fold is defensive, not corrective: if the store holds
several primary channels of one kind, the first (oldest) one is shown and
the rest are ignored, nothing is repaired here.
"""

import logging

from partyman.conf import partyman_settings
from partyman.gates import Gates
from partyman.models import ChannelKind
from partyman.protocols import PartyView, RecordStore
from partyman.store import ADDRESSES, ATTRIBUTES, CONTACT_CHANNELS, PARTIES, get_store

logger = logging.getLogger(__name__)


async def fetch(party_id, store: RecordStore | None = None) -> PartyView | None:
    """Get the assembled view of a party, or None if it does not exist."""
    store = store or get_store()
    rows = await store.select(PARTIES, {"id": party_id})
    if not rows:
        return None
    return await _load_children(store, rows[0])


async def list_parties(
    kind: str | None = None,
    only_active: bool = True,
    store: RecordStore | None = None,
) -> list[PartyView]:
    """List assembled parties, newest first."""
    store = store or get_store()
    filters = {}
    if kind:
        filters["kind"] = kind
    if only_active:
        filters["is_active"] = True

    views = []
    for row in await store.select(PARTIES, filters, order_by=("-created_at",)):
        views.append(await _load_children(store, row))
    return views


async def _load_children(store: RecordStore, party: dict) -> PartyView:
    lookup = {"party_id": party["id"]}
    channels = await store.select(CONTACT_CHANNELS, lookup, order_by=("created_at",))
    addresses = await store.select(ADDRESSES, lookup, order_by=("created_at",))
    attributes = await store.select(ATTRIBUTES, lookup, order_by=("created_at",))
    return assemble(party, channels, addresses, attributes)


def assemble(
    party: dict,
    channels: list[dict],
    addresses: list[dict],
    attributes: list[dict],
) -> PartyView:
    """Pure fold of store rows into a PartyView."""
    primary: dict[str, str] = {}
    for row in channels:
        if row["is_primary"] and row["kind"] not in primary:
            primary[row["kind"]] = row["value"]

    for kind in ChannelKind.values:
        if not Gates.check_primary_invariant(channels, kind):
            logger.warning(
                "Party %s has several primary %s channels, showing the oldest",
                party["id"],
                kind,
            )

    address = addresses[0] if addresses else {}

    attrs: dict[str, str] = {}
    for row in attributes:
        attrs.setdefault(row["category"], row["value"])

    return PartyView(
        id=party["id"],
        name=party["name"],
        kind=party["kind"],
        first_name=party["first_name"],
        last_name=party["last_name"],
        email=primary.get(ChannelKind.EMAIL, ""),
        phone=primary.get(ChannelKind.PHONE, ""),
        industry=attrs.get(partyman_settings.CONVENIENCE_CATEGORY, ""),
        address_line1=address.get("line1", ""),
        address_line2=address.get("line2", ""),
        city=address.get("city", ""),
        region=address.get("region", ""),
        postal_code=address.get("postal_code", ""),
        country=address.get("country", ""),
        attributes=attrs,
        secondary_ref=party["secondary_ref"],
        is_active=party["is_active"],
        created_at=party["created_at"],
        updated_at=party["updated_at"],
    )
