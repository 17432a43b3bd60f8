"""
Partyman public API.

CORE (essential):
    PartyService.validate(data)        - Validate input (no storage)
    PartyService.create(data)          - Create prospect
    PartyService.update(id, data)      - Partial update
    PartyService.delete(id)            - Delete party
    PartyService.get(id)               - Assembled view
    PartyService.convert(id, ...)      - PROSPECT -> CUSTOMER

CONVENIENCE (helpers):
    PartyService.prospects()           - List prospects
    PartyService.customers()           - List customers
    PartyService.conversion_check(id)  - Errors/warnings before converting
    PartyService.secondary_config()    - Secondary system configuration
"""

from typing import Any

from partyman.models import PartyKind
from partyman.protocols import ConversionCheck, ConversionResult, PartyView, RecordStore
from partyman.services import assembler, conversion, party
from partyman.services.sync import SecondarySync
from partyman.services.validation import PartyInput, validate


class PartyService:
    """
    Partyman public API.

    Uses @classmethod for extensibility: override _store() / _sync() to
    plug in another RecordStore or bridge.
    """

    # ======================================================================
    # Backends
    # ======================================================================

    @classmethod
    def _store(cls) -> RecordStore | None:
        """Internal: RecordStore to use. None means the Django store."""
        return None

    @classmethod
    def _sync(cls) -> SecondarySync | None:
        """Internal: SecondarySync to use. None means the configured bridge."""
        return None

    # ======================================================================
    # CORE API
    # ======================================================================

    @classmethod
    def validate(cls, data: dict[str, Any]) -> PartyInput:
        """
        Validate input for a new party.

        Raises:
            ValidationError: with the list of violated rules
        """
        return validate(data)

    @classmethod
    async def create(cls, data: dict[str, Any]) -> PartyView:
        """
        Create a prospect with its contact channels, address and attributes.

        Args:
            data: Flat input (first_name, last_name, email, phone, address
                fields, industry, attributes)

        Returns:
            Assembled PartyView
        """
        return await party.create(data, kind=PartyKind.PROSPECT, store=cls._store())

    @classmethod
    async def update(cls, party_id, data: dict[str, Any]) -> PartyView:
        """
        Partial update. Keys absent from `data` are left untouched.

        Returns:
            Assembled PartyView
        """
        return await party.update(party_id, data, store=cls._store())

    @classmethod
    async def delete(cls, party_id) -> bool:
        """Delete a party and (by cascade) its child rows."""
        return await party.delete(party_id, store=cls._store())

    @classmethod
    async def get(cls, party_id) -> PartyView | None:
        """
        Get assembled party.

        Returns:
            PartyView or None if not found
        """
        return await assembler.fetch(party_id, store=cls._store())

    @classmethod
    async def convert(cls, party_id, confirmed: bool = False) -> ConversionResult:
        """
        Convert a prospect into a customer.

        Args:
            party_id: Party id
            confirmed: Proceed despite warnings (missing email/phone)
        """
        return await conversion.convert(
            party_id,
            confirmed=confirmed,
            store=cls._store(),
            sync=cls._sync(),
        )

    # ======================================================================
    # CONVENIENCE API
    # ======================================================================

    @classmethod
    async def prospects(cls, only_active: bool = True) -> list[PartyView]:
        """List prospects, newest first."""
        return await assembler.list_parties(
            kind=PartyKind.PROSPECT, only_active=only_active, store=cls._store()
        )

    @classmethod
    async def customers(cls, only_active: bool = True) -> list[PartyView]:
        """List customers, newest first."""
        return await assembler.list_parties(
            kind=PartyKind.CUSTOMER, only_active=only_active, store=cls._store()
        )

    @classmethod
    async def conversion_check(cls, party_id) -> ConversionCheck:
        """Errors and warnings a conversion would raise."""
        return await conversion.check(party_id, store=cls._store())

    @classmethod
    async def secondary_config(cls) -> dict[str, Any]:
        """Configuration payload of the secondary system."""
        sync = cls._sync() or SecondarySync.from_settings()
        return await sync.fetch_configuration()
