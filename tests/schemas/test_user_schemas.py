"""User Schemas — field rules for user create/update payloads."""

import pytest
from pydantic import ValidationError

from tasktrack.core.domain_types import UserRole
from tasktrack.schemas.user import UserCreate, UserUpdate

VALID = {"name": "Jane Roe", "email": "Jane@Example.com", "password": "Secret123"}


def _error_fields(exc: ValidationError) -> set[str]:
    return {str(e["loc"][0]) if e["loc"] else "" for e in exc.errors()}


def test_valid_create_normalizes_email_and_defaults_role():
    user = UserCreate(**VALID)
    assert user.email == "jane@example.com"
    assert user.role == UserRole.CUSTOMER
    assert user.to_patch() == {
        "name": "Jane Roe", "email": "jane@example.com", "password": "Secret123",
    }


@pytest.mark.parametrize("field", ["name", "email", "password"])
def test_create_requires_core_fields(field):
    data = {k: v for k, v in VALID.items() if k != field}
    with pytest.raises(ValidationError) as info:
        UserCreate(**data)
    assert field in _error_fields(info.value)


@pytest.mark.parametrize("name", ["J", "Jane 2nd", "x" * 101])
def test_invalid_names(name):
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "name": name})
    assert "name" in _error_fields(info.value)


def test_invalid_email():
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "email": "not-an-email"})
    assert info.value.errors()[0]["msg"] == "Invalid email format"


@pytest.mark.parametrize("password", ["Ab1", "alllower123", "ALLUPPER123", "NoDigitsHere"])
def test_weak_passwords(password):
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "password": password})
    assert "password" in _error_fields(info.value)


def test_phone_needs_ten_digits():
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "phone": "+1 (555) 123"})
    assert "at least 10 digits" in info.value.errors()[0]["msg"]


def test_phone_rejects_letters():
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "phone": "call-me-maybe"})
    assert info.value.errors()[0]["msg"] == "Invalid phone format"


def test_phone_with_formatting_is_kept():
    user = UserCreate(**{**VALID, "phone": " +1 (555) 123-4567 "})
    assert user.phone == "+1 (555) 123-4567"


def test_unknown_role_rejected():
    with pytest.raises(ValidationError):
        UserCreate(**{**VALID, "role": "superuser"})


def test_extra_fields_forbidden():
    with pytest.raises(ValidationError) as info:
        UserCreate(**{**VALID, "isAdmin": True})
    assert "isAdmin" in _error_fields(info.value)


def test_update_requires_a_field():
    with pytest.raises(ValidationError) as info:
        UserUpdate()
    assert "At least one field" in info.value.errors()[0]["msg"]


def test_update_patch_has_only_provided_fields():
    update = UserUpdate(address="  221B Baker Street ")
    assert update.to_patch() == {"address": "221B Baker Street"}


def test_short_address_rejected():
    with pytest.raises(ValidationError):
        UserUpdate(address="abc")
