"""Partyman exceptions."""


class PartymanError(Exception):
    """
    Structured exception for party operations.

    Usage:
        try:
            view = await PartyService.update(party_id, {"email": "a@b.com"})
        except PartymanError as e:
            if e.code == "PARTY_NOT_FOUND":
                handle_not_found()
    """

    _default_messages = {
        "PARTY_NOT_FOUND": "Party not found",
        "VALIDATION_FAILED": "Invalid party data",
        "STORE_FAILED": "Store operation failed",
        "PERSIST_FAILED": "Could not persist party data",
        "COMPENSATION_FAILED": "Compensating delete failed",
        "CONVERSION_FAILED": "Prospect conversion failed",
        "SYNC_FAILED": "Secondary system call failed",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class ValidationError(PartymanError):
    """Bad input. Raised before any store interaction."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("VALIDATION_FAILED", ", ".join(self.errors), errors=self.errors)


class StoreError(PartymanError):
    """A single row-level store call failed."""

    def __init__(self, table: str, operation: str, message: str | None = None):
        self.table = table
        self.operation = operation
        super().__init__(
            "STORE_FAILED",
            message or f"{operation} on {table} failed",
            table=table,
            operation=operation,
        )


class PersistError(PartymanError):
    """
    A field group could not be written.

    `group` names the failing group ("party", "email", "phone", "address",
    "attribute:<category>"). `committed` lists groups already written when
    the failure happened (always empty after a compensated create).
    """

    def __init__(
        self,
        group: str,
        party_id=None,
        committed: list[str] | None = None,
        cause: Exception | None = None,
    ):
        self.group = group
        self.party_id = party_id
        self.committed = list(committed or [])
        self.cause = cause
        super().__init__(
            "PERSIST_FAILED",
            f"Failed to write {group}: {cause}" if cause else f"Failed to write {group}",
            group=group,
            party_id=str(party_id) if party_id else None,
            committed=self.committed,
        )


class CompensationError(PartymanError):
    """The compensating delete of a failed create did not succeed."""

    def __init__(
        self,
        group: str,
        party_id,
        cause: Exception | None = None,
        failure: Exception | None = None,
    ):
        self.group = group
        self.party_id = party_id
        # cause: the failed cleanup; failure: the step error that triggered it
        self.cause = cause
        self.failure = failure
        super().__init__(
            "COMPENSATION_FAILED",
            f"Create failed on {group} and party {party_id} could not be removed",
            group=group,
            party_id=str(party_id),
        )


class ConversionError(PartymanError):
    """
    Prospect conversion failed.

    Stages: "not-a-prospect", "blocking-validation", "sync-failed", "link-failed".
    """

    def __init__(
        self,
        stage: str,
        cause: Exception | None = None,
        errors: list[str] | None = None,
        **data,
    ):
        self.stage = stage
        self.cause = cause
        self.errors = list(errors or [])
        message = stage
        if self.errors:
            message = f"{stage}: {', '.join(self.errors)}"
        elif cause is not None:
            message = f"{stage}: {cause}"
        super().__init__("CONVERSION_FAILED", message, stage=stage, errors=self.errors, **data)


class SyncError(PartymanError):
    """Secondary system call failed or returned an unusable response."""

    def __init__(self, message: str, script: str = "", response=None):
        self.script = script
        self.response = response
        super().__init__("SYNC_FAILED", message, script=script)
