from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import parse_enum, require_min_length, require_non_empty
from ..core.constants import DEFAULT_USER_NAME, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: verify a username/password pair."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user


class UserService:
    """Use case: manage staff accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(
        self,
        *,
        username: str,
        password: str,
        name: Optional[str] = None,
        role: Role | str = Role.ADMIN,
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        name = name.strip() if name and name.strip() else DEFAULT_USER_NAME
        role = parse_enum(Role, role, "Role")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
        )
        logger.info("Created user %s (id=%s, role=%s)", username, user_id, role.value)
        return self.require_user(user_id)

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(int(user_id))

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._users.get_by_username(username)

    def require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def delete_user(self, user_id: int) -> None:
        self.require_user(user_id)
        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError(f"User {user_id} not found")
        logger.info("Deleted user id=%s", user_id)
