"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate: name, email, password required; role defaults to customer
    - UserUpdate: every field optional, at least one must be provided
    - Unknown fields rejected (extra="forbid")
    - email trimmed and lowercased; name/phone/address trimmed
    - UserResponse never carries the password

Design Decisions:
    - Shared validators live on _UserFields so create/update apply identical rules
    - PydanticCustomError over ValueError: messages reach the client verbatim
      (no "Value error, " prefix)
"""

import re
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from tasktrack.core.domain_types import UserRole
from tasktrack.core.user_record import User


NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
PHONE_PATTERN = re.compile(r"[+]?[\d\s\-()]+")
PASSWORD_MIN_LENGTH = 6
PHONE_MIN_DIGITS = 10


class _UserFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def check_name(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not 2 <= len(v) <= 100:
            raise PydanticCustomError(
                "name_length", "Name must be between 2 and 100 characters",
            )
        if not NAME_PATTERN.fullmatch(v):
            raise PydanticCustomError(
                "name_charset", "Name can only contain letters and spaces",
            )
        return v

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip().lower()
        if not EMAIL_PATTERN.fullmatch(v):
            raise PydanticCustomError("email_format", "Invalid email format")
        return v

    @field_validator("password", check_fields=False)
    @classmethod
    def check_password(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if len(v) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_length",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
            )
        if not (
            re.search(r"[a-z]", v) and re.search(r"[A-Z]", v) and re.search(r"\d", v)
        ):
            raise PydanticCustomError(
                "password_strength",
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number",
            )
        return v

    @field_validator("phone", mode="before", check_fields=False)
    @classmethod
    def check_phone(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not PHONE_PATTERN.fullmatch(v):
            raise PydanticCustomError("phone_format", "Invalid phone format")
        if len(re.sub(r"\D", "", v)) < PHONE_MIN_DIGITS:
            raise PydanticCustomError(
                "phone_digits",
                f"Phone number must contain at least {PHONE_MIN_DIGITS} digits",
            )
        return v

    @field_validator("address", mode="before", check_fields=False)
    @classmethod
    def check_address(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not 5 <= len(v) <= 500:
            raise PydanticCustomError(
                "address_length", "Address must be between 5 and 500 characters",
            )
        return v

    def to_patch(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserCreate(_UserFields):
    """User creation payload."""
    name: str
    email: str
    password: str
    role: UserRole = UserRole.CUSTOMER
    phone: str | None = None
    address: str | None = None


class UserUpdate(_UserFields):
    """User update payload — partial."""
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: UserRole | None = None
    phone: str | None = None
    address: str | None = None

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.to_patch():
            raise PydanticCustomError(
                "empty_update", "At least one field must be provided for update",
            )
        return self


class UserResponse(BaseModel):
    """User response — password deliberately absent."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    email: str
    role: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            phone=user.phone,
            address=user.address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


def serialize_user(user: User) -> dict:
    return UserResponse.from_user(user).model_dump(by_alias=True, mode="json")
