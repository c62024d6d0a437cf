"""User Service — CRUD over user records with email uniqueness.

Invariants:
    - Payloads arrive already validated (schemas/user.py)
    - Email uniqueness checked under the same lock as the write; reads take it too
    - Updating a user to its own current email is not a conflict
"""

import logging
import threading

from tasktrack.core.domain_types import UserId
from tasktrack.core.errors import DuplicateConstraintError, ResourceNotFoundError
from tasktrack.core.repository_protocols import UserRepository
from tasktrack.core.user_record import User
from tasktrack.schemas.user import UserCreate, UserUpdate
from tasktrack.services.task_service import Clock, utc_now

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: UserRepository, clock: Clock = utc_now):
        self._store = store
        self._clock = clock
        self._lock = threading.Lock()

    def list_users(self) -> list[User]:
        with self._lock:
            return self._store.list_all()

    def count_users(self) -> int:
        with self._lock:
            return self._store.count()

    def get_user(self, user_id: UserId) -> User:
        with self._lock:
            user = self._store.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    def create_user(self, payload: UserCreate) -> User:
        patch = payload.to_patch()
        with self._lock:
            if self._store.get_by_email(patch["email"]) is not None:
                raise DuplicateConstraintError(
                    "User", "email", "User with this email already exists",
                )
            user = self._store.create(patch, self._clock())
        logger.info(f"User created: {user.id}", extra={"user_id": str(user.id)})
        return user

    def update_user(self, user_id: UserId, payload: UserUpdate) -> User:
        patch = payload.to_patch()
        with self._lock:
            if self._store.get(user_id) is None:
                raise ResourceNotFoundError("User", str(user_id))
            email = patch.get("email")
            if email is not None:
                owner = self._store.get_by_email(email)
                if owner is not None and owner.id != user_id:
                    raise DuplicateConstraintError(
                        "User", "email", "Email already in use by another user",
                    )
            user = self._store.update(user_id, patch, self._clock())
        logger.info(f"User updated: {user_id}", extra={"user_id": str(user_id)})
        return user

    def delete_user(self, user_id: UserId) -> bool:
        with self._lock:
            if not self._store.delete(user_id):
                raise ResourceNotFoundError("User", str(user_id))
        logger.info(f"User deleted: {user_id}", extra={"user_id": str(user_id)})
        return True
