"""Validation service - pure input checks, never touches storage.

Two input shapes come out of here:

    PartyInput  - cleaned input for create(); only non-empty values count
                  as supplied.
    PartyPatch  - cleaned input for update(); a group is present when any
                  of its keys is present in the caller's dict, whatever the
                  value. An empty value means "write empty", an absent key
                  means "leave alone".
"""

from dataclasses import dataclass, field
from typing import Any

from partyman.exceptions import ValidationError
from partyman.gates import GateError, Gates
from partyman.models import ChannelKind
from partyman.protocols import ConversionCheck, PartyView


CORE_FIELDS = ("first_name", "last_name")
PATCH_ONLY_CORE_FIELDS = ("is_active",)

CHANNEL_FIELDS = {
    "email": ChannelKind.EMAIL,
    "phone": ChannelKind.PHONE,
}

# input key -> PartyAddress column
ADDRESS_FIELDS = {
    "address_line1": "line1",
    "address_line2": "line2",
    "city": "city",
    "region": "region",
    "postal_code": "postal_code",
    "country": "country",
}

# Flat keys mapped onto a category attribute
CATEGORY_FIELDS = {
    "industry": "industry",
}

ATTRIBUTES_KEY = "attributes"

WARNING_NO_EMAIL = "No email address found"
WARNING_NO_PHONE = "No phone number found"


@dataclass(frozen=True)
class PartyInput:
    """Cleaned input for creating a party."""

    first_name: str = ""
    last_name: str = ""
    channels: dict[str, str] = field(default_factory=dict)
    address: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PartyPatch:
    """
    Cleaned partial update, one dict per field group.

    Each dict holds only the keys the caller supplied. An empty dict means
    the group is absent and must be left untouched.
    """

    core: dict[str, Any] = field(default_factory=dict)
    channels: dict[str, str] = field(default_factory=dict)
    address: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.core or self.channels or self.address or self.attributes)

    @property
    def groups(self) -> list[str]:
        """Names of the groups present in this patch, in write order."""
        names = []
        if self.core:
            names.append("party")
        names.extend(kind.lower() for kind in self.channels)
        if self.address:
            names.append("address")
        names.extend(f"attribute:{category}" for category in self.attributes)
        return names


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _split(data: dict[str, Any], allow_patch_fields: bool) -> tuple[dict, dict, dict, dict, list[str]]:
    """Split a flat input dict into (core, channels, address, attributes, errors)."""
    core: dict[str, Any] = {}
    channels: dict[str, str] = {}
    address: dict[str, str] = {}
    attributes: dict[str, str] = {}
    errors: list[str] = []

    for key, value in data.items():
        if key in CORE_FIELDS:
            core[key] = _clean(value)
        elif allow_patch_fields and key in PATCH_ONLY_CORE_FIELDS:
            if isinstance(value, bool):
                core[key] = value
            else:
                errors.append(f"{key} must be true or false")
        elif key in CHANNEL_FIELDS:
            cleaned = _clean(value)
            if key == "email":
                cleaned = cleaned.lower()
            channels[CHANNEL_FIELDS[key]] = cleaned
        elif key in ADDRESS_FIELDS:
            address[ADDRESS_FIELDS[key]] = _clean(value)
        elif key in CATEGORY_FIELDS:
            attributes[CATEGORY_FIELDS[key]] = _clean(value)
        elif key == ATTRIBUTES_KEY:
            if value is None:
                continue
            if not isinstance(value, dict):
                errors.append("Attributes must be a mapping")
                continue
            for category, attr_value in value.items():
                category = _clean(category)
                if not category:
                    errors.append("Attribute category is required")
                    continue
                attributes[category] = _clean(attr_value)
        else:
            errors.append(f"Unknown field: {key}")

    return core, channels, address, attributes, errors


def validate(data: dict[str, Any]) -> PartyInput:
    """
    Validate and clean input for a new party.

    Rules:
    - first or last name must be present
    - email must be present and RFC-shaped
    - phone, if present, must match the phone pattern

    Raises:
        ValidationError: with every violated rule in `errors`
    """
    core, channels, address, attributes, errors = _split(data, allow_patch_fields=False)

    for gate, args in (
        (Gates.name_present, (core.get("first_name"), core.get("last_name"))),
        (Gates.email_shape, (channels.get(ChannelKind.EMAIL),)),
        (Gates.phone_shape, (channels.get(ChannelKind.PHONE),)),
    ):
        try:
            gate(*args)
        except GateError as e:
            errors.append(e.message)

    if errors:
        raise ValidationError(errors)

    return PartyInput(
        first_name=core.get("first_name", ""),
        last_name=core.get("last_name", ""),
        channels={kind: value for kind, value in channels.items() if value},
        address={column: value for column, value in address.items() if value},
        attributes={category: value for category, value in attributes.items() if value},
    )


def validate_patch(data: dict[str, Any]) -> PartyPatch:
    """
    Validate and clean a partial update.

    Only present keys are checked. Empty email/phone values are allowed
    (they clear the stored value).

    Raises:
        ValidationError: with every violated rule in `errors`
    """
    core, channels, address, attributes, errors = _split(data, allow_patch_fields=True)

    if "first_name" in core and "last_name" in core:
        try:
            Gates.name_present(core["first_name"], core["last_name"])
        except GateError as e:
            errors.append(e.message)

    if ChannelKind.EMAIL in channels:
        try:
            Gates.email_shape(channels[ChannelKind.EMAIL], required=False)
        except GateError as e:
            errors.append(e.message)

    if ChannelKind.PHONE in channels:
        try:
            Gates.phone_shape(channels[ChannelKind.PHONE])
        except GateError as e:
            errors.append(e.message)

    if errors:
        raise ValidationError(errors)

    return PartyPatch(core=core, channels=channels, address=address, attributes=attributes)


def conversion_checks(view: PartyView) -> ConversionCheck:
    """
    Checks run before converting a prospect.

    Errors (blocking): not a prospect, missing name.
    Warnings (need confirmation): missing email, missing phone.
    """
    errors: list[str] = []
    warnings: list[str] = []

    try:
        Gates.prospect_only(view.kind)
    except GateError as e:
        errors.append(e.message)

    if not view.name and not Gates.check_name_present(view.first_name, view.last_name):
        errors.append("Prospect must have a name")

    if not view.email:
        warnings.append(WARNING_NO_EMAIL)
    if not view.phone:
        warnings.append(WARNING_NO_PHONE)

    return ConversionCheck(errors=errors, warnings=warnings)
