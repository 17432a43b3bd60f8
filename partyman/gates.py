"""
Partyman Gates - Validation rules.

G1: NamePresent - First or last name must be present
G2: EmailShape - Email must be present and RFC-shaped
G3: PhoneShape - Phone, if present, must use phone characters only
G4: PrimaryInvariant - Max 1 primary channel per (party, kind) in a row set
G5: ProspectOnly - Only prospects can be converted
"""

import re
from dataclasses import dataclass

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email


class GateError(Exception):
    """Gate validation error."""

    def __init__(self, gate_name: str, message: str, details: dict | None = None):
        self.gate_name = gate_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{gate_name}] {message}")


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Partyman validation gates. Pure: no storage access."""

    # =========================================================================
    # G1: Name Present
    # =========================================================================

    @classmethod
    def name_present(cls, first_name: str | None, last_name: str | None) -> GateResult:
        """
        G1: First name or last name must be present.

        Raises:
            GateError: If both are empty
        """
        if not (first_name or "").strip() and not (last_name or "").strip():
            raise GateError(
                "G1_NamePresent",
                "First name or last name is required",
            )
        return GateResult(True, "G1_NamePresent")

    @classmethod
    def check_name_present(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.name_present(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Email Shape
    # =========================================================================

    @classmethod
    def email_shape(cls, email: str | None, required: bool = True) -> GateResult:
        """
        G2: Email must be present (when required) and RFC-shaped.

        Args:
            email: Email address
            required: Whether an empty value is an error

        Raises:
            GateError: If missing or malformed
        """
        value = (email or "").strip()
        if not value:
            if required:
                raise GateError("G2_EmailShape", "Email is required")
            return GateResult(True, "G2_EmailShape", "Empty (not required)")

        try:
            validate_email(value)
        except DjangoValidationError:
            raise GateError(
                "G2_EmailShape",
                "Invalid email format",
                {"value": value},
            )
        return GateResult(True, "G2_EmailShape")

    @classmethod
    def check_email_shape(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.email_shape(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G3: Phone Shape
    # =========================================================================

    @classmethod
    def phone_shape(cls, phone: str | None) -> GateResult:
        """
        G3: Phone, if present, must match the permissive phone pattern.

        Digits, spaces, dashes, parentheses and a leading "+" are accepted.

        Raises:
            GateError: If present and malformed
        """
        value = (phone or "").strip()
        if not value:
            return GateResult(True, "G3_PhoneShape", "Empty (optional)")

        if not PHONE_PATTERN.match(value):
            raise GateError(
                "G3_PhoneShape",
                "Invalid phone format",
                {"value": value},
            )
        return GateResult(True, "G3_PhoneShape")

    @classmethod
    def check_phone_shape(cls, phone: str | None) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.phone_shape(phone)
            return True
        except GateError:
            return False

    # =========================================================================
    # G4: Primary Invariant
    # =========================================================================

    @classmethod
    def primary_invariant(cls, channel_rows: list[dict], kind: str) -> GateResult:
        """
        G4: Maximum 1 primary per (party, kind).

        Args:
            channel_rows: Contact channel rows of a single party
            kind: Channel kind (EMAIL, PHONE)

        Raises:
            GateError: If multiple primaries exist
        """
        count = sum(
            1 for row in channel_rows if row["kind"] == kind and row["is_primary"]
        )
        if count > 1:
            raise GateError(
                "G4_PrimaryInvariant",
                f"Multiple primaries for kind '{kind}'.",
                {"count": count},
            )
        return GateResult(True, "G4_PrimaryInvariant")

    @classmethod
    def check_primary_invariant(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.primary_invariant(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G5: Prospect Only
    # =========================================================================

    @classmethod
    def prospect_only(cls, kind: str) -> GateResult:
        """
        G5: Only PROSPECT records can be converted.

        Raises:
            GateError: If the record is not a prospect (or already converted)
        """
        if kind != "PROSPECT":
            raise GateError(
                "G5_ProspectOnly",
                "This record is not a prospect or has already been converted",
                {"kind": kind},
            )
        return GateResult(True, "G5_ProspectOnly")

    @classmethod
    def check_prospect_only(cls, kind: str) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.prospect_only(kind)
            return True
        except GateError:
            return False
