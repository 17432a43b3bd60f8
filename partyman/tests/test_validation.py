"""Tests for input validation (no storage involved)."""

import pytest

from partyman.exceptions import ValidationError
from partyman.protocols import PartyView
from partyman.services.validation import (
    WARNING_NO_EMAIL,
    WARNING_NO_PHONE,
    conversion_checks,
    validate,
    validate_patch,
)


class TestValidate:
    """validate(): input for a new party."""

    def test_minimal_input(self):
        cleaned = validate({"last_name": "Doe", "email": "doe@example.com"})
        assert cleaned.first_name == ""
        assert cleaned.last_name == "Doe"
        assert cleaned.channels == {"EMAIL": "doe@example.com"}
        assert cleaned.address == {}
        assert cleaned.attributes == {}

    def test_splits_flat_input_into_groups(self):
        cleaned = validate(
            {
                "first_name": " Jane ",
                "last_name": "Doe",
                "email": " Jane@Example.COM ",
                "phone": "555 0100",
                "address_line1": "1 Main St",
                "city": "Springfield",
                "industry": "Retail",
                "attributes": {"source": "fair"},
            }
        )
        assert cleaned.first_name == "Jane"
        assert cleaned.channels == {"EMAIL": "jane@example.com", "PHONE": "555 0100"}
        assert cleaned.address == {"line1": "1 Main St", "city": "Springfield"}
        assert cleaned.attributes == {"industry": "Retail", "source": "fair"}

    def test_empty_values_are_not_supplied(self):
        cleaned = validate(
            {"first_name": "Jane", "email": "jane@example.com", "phone": "", "city": "  "}
        )
        assert "PHONE" not in cleaned.channels
        assert cleaned.address == {}

    def test_missing_name(self):
        with pytest.raises(ValidationError) as exc:
            validate({"email": "jane@example.com"})
        assert exc.value.errors == ["First name or last name is required"]
        assert exc.value.code == "VALIDATION_FAILED"

    def test_missing_email(self):
        with pytest.raises(ValidationError) as exc:
            validate({"first_name": "Jane"})
        assert exc.value.errors == ["Email is required"]

    def test_malformed_email(self):
        with pytest.raises(ValidationError) as exc:
            validate({"first_name": "Jane", "email": "jane.example.com"})
        assert exc.value.errors == ["Invalid email format"]

    def test_malformed_phone(self):
        with pytest.raises(ValidationError) as exc:
            validate({"first_name": "Jane", "email": "jane@example.com", "phone": "call me"})
        assert exc.value.errors == ["Invalid phone format"]

    def test_reports_every_violation(self):
        with pytest.raises(ValidationError) as exc:
            validate({"email": "nope", "phone": "abc", "nickname": "JD"})
        assert exc.value.errors == [
            "Unknown field: nickname",
            "First name or last name is required",
            "Invalid email format",
            "Invalid phone format",
        ]
        assert exc.value.as_dict()["data"]["errors"] == exc.value.errors

    def test_blank_attribute_category(self):
        with pytest.raises(ValidationError) as exc:
            validate({"first_name": "Jane", "email": "jane@example.com", "attributes": {" ": "x"}})
        assert exc.value.errors == ["Attribute category is required"]

    def test_attributes_must_be_a_mapping(self):
        with pytest.raises(ValidationError) as exc:
            validate({"first_name": "Sam", "email": "sam@example.com", "attributes": ["industry"]})
        assert exc.value.errors == ["Attributes must be a mapping"]

    def test_null_attributes_ignored(self):
        cleaned = validate({"first_name": "Sam", "email": "sam@example.com", "attributes": None})
        assert cleaned.attributes == {}


class TestValidatePatch:
    """validate_patch(): partial update with presence semantics."""

    def test_empty_patch(self):
        patch = validate_patch({})
        assert patch.is_empty
        assert patch.groups == []

    def test_present_empty_values_are_kept(self):
        patch = validate_patch({"phone": "", "city": "", "industry": ""})
        assert patch.channels == {"PHONE": ""}
        assert patch.address == {"city": ""}
        assert patch.attributes == {"industry": ""}
        assert patch.groups == ["phone", "address", "attribute:industry"]

    def test_absent_keys_are_left_out(self):
        patch = validate_patch({"email": "New@Example.com"})
        assert patch.core == {}
        assert patch.channels == {"EMAIL": "new@example.com"}
        assert patch.address == {}
        assert patch.groups == ["email"]

    def test_empty_email_allowed(self):
        assert validate_patch({"email": ""}).channels == {"EMAIL": ""}

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_patch({"email": "nope"})
        assert exc.value.errors == ["Invalid email format"]

    def test_malformed_phone_rejected(self):
        with pytest.raises(ValidationError):
            validate_patch({"phone": "abc"})

    def test_clearing_both_names_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_patch({"first_name": "", "last_name": " "})
        assert exc.value.errors == ["First name or last name is required"]

    def test_clearing_one_name_allowed(self):
        assert validate_patch({"first_name": ""}).core == {"first_name": ""}

    def test_is_active(self):
        patch = validate_patch({"is_active": False})
        assert patch.core == {"is_active": False}
        assert patch.groups == ["party"]

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_is_active_must_be_boolean(self, value):
        """Strings and numbers are rejected, never coerced."""
        with pytest.raises(ValidationError) as exc:
            validate_patch({"is_active": value})
        assert exc.value.errors == ["is_active must be true or false"]

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_patch({"kind": "CUSTOMER"})
        assert exc.value.errors == ["Unknown field: kind"]


def _view(**kwargs):
    defaults = {
        "id": "00000000-0000-0000-0000-000000000001",
        "name": "Jane Doe",
        "kind": "PROSPECT",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "555 0100",
    }
    defaults.update(kwargs)
    return PartyView(**defaults)


class TestConversionChecks:
    """conversion_checks(): errors block, warnings need confirmation."""

    def test_complete_prospect(self):
        checks = conversion_checks(_view())
        assert checks.is_valid
        assert checks.warnings == []

    def test_missing_channels_are_warnings(self):
        checks = conversion_checks(_view(email="", phone=""))
        assert checks.is_valid
        assert checks.warnings == [WARNING_NO_EMAIL, WARNING_NO_PHONE]

    def test_customer_is_blocking(self):
        checks = conversion_checks(_view(kind="CUSTOMER"))
        assert not checks.is_valid
        assert checks.errors == ["This record is not a prospect or has already been converted"]

    def test_nameless_is_blocking(self):
        checks = conversion_checks(_view(name="", first_name="", last_name=""))
        assert checks.errors == ["Prospect must have a name"]
