"""
Identity context consumed by the marketplace services.

An ``Actor`` is the authenticated caller reduced to what authorization needs:
its id and its role. It is resolved per request from the persisted user row
and never stored.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"
    BUYER = "buyer"

    @classmethod
    def choices(cls):
        return [(role.value, role.name.title()) for role in cls]

    @classmethod
    def parse(cls, value):
        """Return the Role for ``value`` or None when it is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Actor:
    id: uuid.UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_seller(self) -> bool:
        return self.role is Role.SELLER

    @property
    def is_buyer(self) -> bool:
        return self.role is Role.BUYER

    @classmethod
    def from_user(cls, user) -> "Actor":
        """Build an actor from an authenticated user; superusers act as admins."""
        if user.is_superuser:
            return cls(id=user.id, role=Role.ADMIN)

        role = Role.parse(user.role)
        if role is None:
            logger.warning(f"User {user.id} has unknown role {user.role!r}; treating as buyer")
            role = Role.BUYER
        return cls(id=user.id, role=role)
