"""The authenticated caller.

Token issuance and sessions belong to the outer web layer; by the time a
request reaches a handler the caller is just an id and a role.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:

    id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, user_id: str) -> bool:
        return self.id == user_id

    def can_access(self, user_id: str) -> bool:
        """Owners and admins may read or change a user's resource."""
        return self.owns(user_id) or self.is_admin
