"""Conversion service - PROSPECT -> CUSTOMER.

    PROSPECT --convert--> CUSTOMER   (terminal, no way back)

Order of work:
    1. load the party; anything but a prospect is rejected untouched
    2. conversion checks: errors abort, warnings need `confirmed=True`
    3. create the secondary record
    4. one row update: kind=CUSTOMER + secondary_ref + converted_at

The party only changes in step 4, and only after step 3 succeeded. If the
step 4 write fails, the secondary record exists with no local pointer; this
is reported as "link-failed" and logged on "partyman.integrity".
"""

import logging

from django.utils import timezone

from partyman.exceptions import ConversionError, PartymanError, StoreError, SyncError
from partyman.gates import Gates
from partyman.models import Party, PartyKind
from partyman.protocols import ConversionCheck, ConversionResult, RecordStore
from partyman.services.assembler import fetch
from partyman.services.sync import SecondarySync
from partyman.services.validation import conversion_checks
from partyman.signals import party_converted
from partyman.store import PARTIES, get_store

logger = logging.getLogger(__name__)
integrity_logger = logging.getLogger("partyman.integrity")


async def check(party_id, store: RecordStore | None = None) -> ConversionCheck:
    """
    Run conversion checks without converting.

    Raises:
        PartymanError: PARTY_NOT_FOUND
    """
    view = await fetch(party_id, store=store)
    if view is None:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))
    return conversion_checks(view)


async def convert(
    party_id,
    confirmed: bool = False,
    store: RecordStore | None = None,
    sync: SecondarySync | None = None,
) -> ConversionResult:
    """
    Convert a prospect into a customer.

    Args:
        party_id: Party id
        confirmed: Caller accepted the warnings (missing email/phone)
        store: RecordStore (defaults to the Django store)
        sync: SecondarySync (defaults to the configured bridge)

    Returns:
        ConversionResult. converted=False with warnings when confirmation
        is still needed; nothing is written in that case.

    Raises:
        PartymanError: PARTY_NOT_FOUND
        ConversionError: not-a-prospect, blocking-validation, sync-failed,
            link-failed
    """
    store = store or get_store()

    view = await fetch(party_id, store=store)
    if view is None:
        raise PartymanError("PARTY_NOT_FOUND", party_id=str(party_id))

    if not Gates.check_prospect_only(view.kind):
        raise ConversionError("not-a-prospect", party_id=str(party_id), kind=view.kind)

    checks = conversion_checks(view)
    if checks.errors:
        raise ConversionError("blocking-validation", errors=checks.errors, party_id=str(party_id))

    if checks.warnings and not confirmed:
        return ConversionResult(converted=False, party=view, warnings=checks.warnings)

    sync = sync or SecondarySync.from_settings()
    try:
        ref = await sync.sync(view)
    except SyncError as e:
        logger.warning("Conversion of %s stopped, secondary sync failed: %s", party_id, e)
        raise ConversionError("sync-failed", cause=e, party_id=str(party_id)) from e

    try:
        updated = await store.update(
            PARTIES,
            {"id": party_id, "kind": PartyKind.PROSPECT},
            {
                "kind": PartyKind.CUSTOMER,
                "secondary_ref": ref.record_id,
                "converted_at": timezone.now(),
            },
        )
    except StoreError as e:
        _log_orphan(party_id, ref.record_id, e)
        raise ConversionError(
            "link-failed",
            cause=e,
            party_id=str(party_id),
            secondary_ref=ref.record_id,
        ) from e

    if not updated:
        # Deleted or converted by someone else since step 1
        _log_orphan(party_id, ref.record_id, "party no longer a prospect")
        raise ConversionError(
            "link-failed",
            party_id=str(party_id),
            secondary_ref=ref.record_id,
        )

    converted = await fetch(party_id, store=store)
    logger.info("Party %s converted, secondary record %s", party_id, ref.record_id)
    await party_converted.asend(sender=Party, party=converted, secondary_ref=ref)
    return ConversionResult(
        converted=True,
        party=converted,
        secondary_ref=ref,
        warnings=checks.warnings,
    )


def _log_orphan(party_id, record_id, reason):
    integrity_logger.error(
        "Secondary record %s was created for party %s but could not be linked (%s). "
        "It has no local reference.",
        record_id,
        party_id,
        reason,
    )
