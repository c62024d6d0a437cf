"""In-Memory User Store — keyed collection of immutable User records.

Invariants:
    - get_by_email compares lowercased addresses
    - Uniqueness is NOT enforced here; UserService checks before writing
"""

from datetime import datetime
from typing import Any

from tasktrack.core.domain_types import UserId
from tasktrack.core.user_record import User


class InMemoryUserStore:
    """Process-local UserRepository implementation."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def create(self, patch: dict[str, Any], now: datetime) -> User:
        user = User.create(patch, now)
        self._users[user.id] = user
        return user

    def get(self, user_id: UserId) -> User | None:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        return next(
            (u for u in self._users.values() if u.email.lower() == wanted), None,
        )

    def update(
        self, user_id: UserId, patch: dict[str, Any], now: datetime,
    ) -> User | None:
        current = self._users.get(user_id)
        if current is None:
            return None
        updated = current.merge(patch, now)
        self._users[user_id] = updated
        return updated

    def delete(self, user_id: UserId) -> bool:
        return self._users.pop(user_id, None) is not None

    def list_all(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: (u.created_at, str(u.id)))

    def count(self) -> int:
        return len(self._users)
