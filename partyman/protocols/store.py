"""Primary store protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """
    Row-level access to the primary store.

    Each call touches a single table. Filters are equality predicates only.
    No multi-row or multi-table transaction is offered.
    """

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        ...

    async def update(
        self, table: str, filters: dict[str, Any], patch: dict[str, Any]
    ) -> int:
        """Update matching rows, return the number of rows touched."""
        ...

    async def select(
        self,
        table: str,
        filters: dict[str, Any],
        order_by: tuple[str, ...] = (),
    ) -> list[dict[str, Any]]:
        """Return matching rows as dicts."""
        ...

    async def delete(self, table: str, filters: dict[str, Any]) -> int:
        """Delete matching rows, return the number of rows deleted."""
        ...
