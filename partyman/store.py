"""
Row-level store over the Django async ORM.

Every method issues exactly one single-table statement, outside any
transaction.atomic() block. Cross-table consistency is the caller's job
(see partyman.services.saga).
"""

import logging
from typing import Any

from django.db import DatabaseError
from django.utils import timezone

from partyman.exceptions import StoreError
from partyman.models import ContactChannel, Party, PartyAddress, PartyAttribute

logger = logging.getLogger(__name__)


PARTIES = "parties"
CONTACT_CHANNELS = "contact_channels"
ADDRESSES = "addresses"
ATTRIBUTES = "attributes"

TABLES = {
    PARTIES: Party,
    CONTACT_CHANNELS: ContactChannel,
    ADDRESSES: PartyAddress,
    ATTRIBUTES: PartyAttribute,
}


class DjangoRecordStore:
    """RecordStore backed by the partyman models."""

    tables = TABLES

    def _model(self, table: str):
        try:
            return self.tables[table]
        except KeyError:
            raise StoreError(table, "lookup", f"Unknown table: {table}")

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        model = self._model(table)
        try:
            obj = await model.objects.acreate(**row)
        except DatabaseError as e:
            logger.warning("Insert into %s failed: %s", table, e)
            raise StoreError(table, "insert", str(e)) from e
        return _to_row(obj)

    async def update(
        self, table: str, filters: dict[str, Any], patch: dict[str, Any]
    ) -> int:
        model = self._model(table)
        # QuerySet.update() skips auto_now
        patch = {"updated_at": timezone.now(), **patch}
        try:
            return await model.objects.filter(**filters).aupdate(**patch)
        except DatabaseError as e:
            logger.warning("Update of %s failed: %s", table, e)
            raise StoreError(table, "update", str(e)) from e

    async def select(
        self,
        table: str,
        filters: dict[str, Any],
        order_by: tuple[str, ...] = (),
    ) -> list[dict[str, Any]]:
        model = self._model(table)
        qs = model.objects.filter(**filters)
        if order_by:
            qs = qs.order_by(*order_by)
        try:
            return [row async for row in qs.values()]
        except DatabaseError as e:
            logger.warning("Select from %s failed: %s", table, e)
            raise StoreError(table, "select", str(e)) from e

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        model = self._model(table)
        try:
            deleted, _ = await model.objects.filter(**filters).adelete()
        except DatabaseError as e:
            logger.warning("Delete from %s failed: %s", table, e)
            raise StoreError(table, "delete", str(e)) from e
        return deleted


def _to_row(obj) -> dict[str, Any]:
    """Model instance -> dict keyed like QuerySet.values()."""
    return {f.attname: getattr(obj, f.attname) for f in obj._meta.concrete_fields}


def get_store() -> DjangoRecordStore:
    return DjangoRecordStore()
