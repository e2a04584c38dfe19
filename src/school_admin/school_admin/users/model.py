from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Staff account.

    Note: plain data object, the password is only ever held as a hash.
    """

    user_id: int
    username: str
    password_hash: str
    name: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.user_id, "username": self.username, "name": self.name, "role": self.role.value}
