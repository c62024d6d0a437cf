"""User Record — immutable value type for a user account.

Invariants:
    - email is stored lowercased; uniqueness is checked by the service
    - password is kept as given and never serialized by the API layer
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any
from uuid import uuid4

from tasktrack.core.domain_types import UserId, UserRole, DEFAULT_ROLE


USER_PATCHABLE_FIELDS: frozenset[str] = frozenset(
    {"name", "email", "password", "role", "phone", "address"},
)


@dataclass(frozen=True)
class User:
    id: UserId
    name: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime
    role: UserRole = DEFAULT_ROLE
    phone: str | None = None
    address: str | None = None

    @classmethod
    def create(cls, patch: dict[str, Any], now: datetime) -> "User":
        return cls(
            id=UserId(uuid4()),
            name=patch["name"],
            email=patch["email"],
            password=patch["password"],
            role=patch.get("role") or DEFAULT_ROLE,
            phone=patch.get("phone"),
            address=patch.get("address"),
            created_at=now,
            updated_at=now,
        )

    def merge(self, patch: dict[str, Any], now: datetime) -> "User":
        changes = {k: v for k, v in patch.items() if k in USER_PATCHABLE_FIELDS}
        return replace(self, **changes, updated_at=now)
