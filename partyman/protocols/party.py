"""Party protocols."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PartyView:
    """Flat, assembled view of a party and its child collections."""

    id: uuid.UUID
    name: str
    kind: str  # "PROSPECT" | "CUSTOMER"
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    industry: str = ""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    secondary_ref: str = ""
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_prospect(self) -> bool:
        return self.kind == "PROSPECT"


@dataclass(frozen=True)
class SecondaryRef:
    """Identifier of the counterpart record in the secondary system."""

    record_id: str
    layout: str = ""
    raw: dict = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ConversionCheck:
    """Pre-conversion checks: errors block, warnings need confirmation."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion attempt that did not raise."""

    converted: bool
    party: PartyView | None = None
    secondary_ref: SecondaryRef | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def needs_confirmation(self) -> bool:
        return not self.converted and bool(self.warnings)
