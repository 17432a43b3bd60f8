"""Party service - composite create / update / delete.

The store only offers single-table writes, so nothing here uses
transaction.atomic(). Writes are issued one at a time, in order:

create: party row first (client-generated id), then one row per supplied
    channel, the address row, one row per attribute. Any child failure
    deletes the party row (children go with it by cascade).

update: one step per field group present in the patch. Each group is
    planned as NoOp | Insert | UpdateInPlace, then applied. There is no
    compensation: groups written before a failure stay written and are
    listed in PersistError.committed.

delete: party row only; children cascade.
"""

import logging
import uuid
from dataclasses import dataclass
from functools import partial
from typing import Any

from partyman.exceptions import PartymanError, PersistError, StoreError, ValidationError
from partyman.gates import Gates
from partyman.models import Party, PartyKind
from partyman.protocols import PartyView, RecordStore
from partyman.services.assembler import fetch
from partyman.services.saga import Saga
from partyman.services.validation import PartyPatch, validate, validate_patch
from partyman.signals import party_created, party_deleted, party_updated
from partyman.store import ADDRESSES, ATTRIBUTES, CONTACT_CHANNELS, PARTIES, get_store

logger = logging.getLogger(__name__)


# =============================================================================
# Group operations
# =============================================================================


@dataclass(frozen=True)
class NoOp:
    group: str


@dataclass(frozen=True)
class Insert:
    group: str
    table: str
    row: dict[str, Any]


@dataclass(frozen=True)
class UpdateInPlace:
    group: str
    table: str
    row_id: Any
    values: dict[str, Any]


GroupOp = NoOp | Insert | UpdateInPlace


def plan_group(
    group: str,
    table: str,
    existing: dict | None,
    values: dict[str, Any],
    insert_defaults: dict[str, Any],
) -> GroupOp:
    """
    Decide how to write one field group.

    - existing row: update it with the supplied sub-fields only
    - no row, at least one non-empty value: insert (defaults first)
    - otherwise: nothing to write
    """
    if existing is not None:
        return UpdateInPlace(group, table, existing["id"], dict(values))
    if any(value for value in values.values()):
        return Insert(group, table, {**insert_defaults, **values})
    return NoOp(group)


async def apply_group(store: RecordStore, op: GroupOp) -> GroupOp:
    if isinstance(op, Insert):
        await store.insert(op.table, op.row)
    elif isinstance(op, UpdateInPlace):
        await store.update(op.table, {"id": op.row_id}, op.values)
    return op


async def _upsert_group(
    store: RecordStore,
    group: str,
    table: str,
    lookup: dict[str, Any],
    values: dict[str, Any],
    insert_defaults: dict[str, Any],
) -> GroupOp:
    rows = await store.select(table, lookup, order_by=("created_at",))
    op = plan_group(group, table, rows[0] if rows else None, values, insert_defaults)
    logger.debug("Group %s -> %s", group, type(op).__name__)
    return await apply_group(store, op)


# =============================================================================
# Create
# =============================================================================


async def create(
    data: dict[str, Any],
    kind: str = PartyKind.PROSPECT,
    store: RecordStore | None = None,
) -> PartyView:
    """
    Create a party with its contact channels, address and attributes.

    Args:
        data: Flat input (first_name, last_name, email, phone, address_line1,
            address_line2, city, region, postal_code, country, industry,
            attributes)
        kind: Discriminator for the new record
        store: RecordStore (defaults to the Django store)

    Returns:
        Assembled PartyView

    Raises:
        ValidationError: Bad input, nothing written
        PersistError: A write failed; the party row was removed
        CompensationError: A write failed and the party row could not be removed
    """
    cleaned = validate(data)
    store = store or get_store()
    party_id = uuid.uuid4()

    saga = Saga(
        "create",
        party_id=party_id,
        compensation=partial(store.delete, PARTIES, {"id": party_id}),
    )
    saga.add_step(
        "party",
        partial(
            store.insert,
            PARTIES,
            {
                "id": party_id,
                "first_name": cleaned.first_name,
                "last_name": cleaned.last_name,
                "name": Party.display_name(cleaned.first_name, cleaned.last_name),
                "kind": kind,
            },
        ),
    )
    for channel_kind, value in cleaned.channels.items():
        saga.add_step(
            channel_kind.lower(),
            partial(
                store.insert,
                CONTACT_CHANNELS,
                {
                    "party_id": party_id,
                    "kind": channel_kind,
                    "value": value,
                    "is_primary": True,
                },
            ),
        )
    if cleaned.address:
        saga.add_step(
            "address",
            partial(
                store.insert,
                ADDRESSES,
                {"party_id": party_id, "region": "", **cleaned.address},
            ),
        )
    for category, value in cleaned.attributes.items():
        saga.add_step(
            f"attribute:{category}",
            partial(
                store.insert,
                ATTRIBUTES,
                {"party_id": party_id, "category": category, "value": value},
            ),
        )

    await saga.run()

    view = await fetch(party_id, store=store)
    if view is None:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))

    logger.info("Created %s %s", kind, party_id)
    await party_created.asend(sender=Party, party=view)
    return view


# =============================================================================
# Update
# =============================================================================


async def update(
    party_id,
    data: dict[str, Any],
    store: RecordStore | None = None,
) -> PartyView:
    """
    Apply a partial update, group by group.

    Only groups whose keys are present in `data` are written. A present key
    with an empty value writes an empty value.

    Raises:
        ValidationError: Bad input, nothing written
        PartymanError: PARTY_NOT_FOUND
        PersistError: A group failed; earlier groups stay committed
    """
    patch = validate_patch(data)
    store = store or get_store()

    rows = await store.select(PARTIES, {"id": party_id})
    if not rows:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))
    current = rows[0]

    # Single-key patches can still empty the merged name
    touches_name = "first_name" in patch.core or "last_name" in patch.core
    if touches_name and not Gates.check_name_present(
        patch.core.get("first_name", current["first_name"]),
        patch.core.get("last_name", current["last_name"]),
    ):
        raise ValidationError(["First name or last name is required"])

    if not patch.is_empty:
        await _build_update_saga(store, current, patch).run()
        logger.info("Updated party %s (%s)", party_id, ", ".join(patch.groups))

    view = await fetch(party_id, store=store)
    if view is None:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))

    if not patch.is_empty:
        await party_updated.asend(sender=Party, party=view, groups=patch.groups)
    return view


def _build_update_saga(store: RecordStore, current: dict, patch: PartyPatch) -> Saga:
    party_id = current["id"]
    saga = Saga("update", party_id=party_id)

    if patch.core:
        values = dict(patch.core)
        if "first_name" in values or "last_name" in values:
            values["name"] = Party.display_name(
                values.get("first_name", current["first_name"]),
                values.get("last_name", current["last_name"]),
            )
        saga.add_step(
            "party",
            partial(apply_group, store, UpdateInPlace("party", PARTIES, party_id, values)),
        )

    for channel_kind, value in patch.channels.items():
        group = channel_kind.lower()
        saga.add_step(
            group,
            partial(
                _upsert_group,
                store,
                group,
                CONTACT_CHANNELS,
                {"party_id": party_id, "kind": channel_kind, "is_primary": True},
                {"value": value},
                {"party_id": party_id, "kind": channel_kind, "is_primary": True},
            ),
        )

    if patch.address:
        saga.add_step(
            "address",
            partial(
                _upsert_group,
                store,
                "address",
                ADDRESSES,
                {"party_id": party_id},
                patch.address,
                {"party_id": party_id, "region": ""},
            ),
        )

    for category, value in patch.attributes.items():
        group = f"attribute:{category}"
        saga.add_step(
            group,
            partial(
                _upsert_group,
                store,
                group,
                ATTRIBUTES,
                {"party_id": party_id, "category": category},
                {"value": value},
                {"party_id": party_id, "category": category},
            ),
        )

    return saga


# =============================================================================
# Delete
# =============================================================================


async def delete(party_id, store: RecordStore | None = None) -> bool:
    """
    Delete a party. Child rows are removed by cascade.

    Raises:
        PartymanError: PARTY_NOT_FOUND
        PersistError: The delete failed
    """
    store = store or get_store()

    rows = await store.select(PARTIES, {"id": party_id})
    if not rows:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))

    try:
        await store.delete(PARTIES, {"id": party_id})
    except StoreError as e:
        raise PersistError("party", party_id=party_id, cause=e) from e

    logger.info("Deleted party %s", party_id)
    await party_deleted.asend(sender=Party, party_id=party_id)
    return True
