"""
Roles, request principals and password hashing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union
import logging

import bcrypt

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
STAFF_ROLE = "staff"

VIEW_DASHBOARD = "view_dashboard"
MANAGE_STUDENTS = "manage_students"
MANAGE_SCHEDULES = "manage_schedules"
MANAGE_SEATS = "manage_seats"

KNOWN_PERMISSIONS = frozenset({VIEW_DASHBOARD, MANAGE_STUDENTS, MANAGE_SCHEDULES, MANAGE_SEATS})
DEFAULT_STAFF_PERMISSIONS = (VIEW_DASHBOARD, MANAGE_STUDENTS, MANAGE_SCHEDULES)


@dataclass(frozen=True)
class Admin:
    name: str = ADMIN_ROLE


@dataclass(frozen=True)
class Staff:
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    name: str = STAFF_ROLE


Role = Union[Admin, Staff]


def can(role: Role, permission: str) -> bool:
    """Admins may do anything; staff only what their permission set grants."""
    if isinstance(role, Admin):
        return True
    if isinstance(role, Staff):
        return permission in role.permissions
    return False


def parse_role(role: Optional[str], permissions: Optional[Iterable[str]] = None) -> Role:
    if role == ADMIN_ROLE:
        return Admin()
    if role == STAFF_ROLE:
        return Staff(permissions=frozenset(permissions or ()))
    raise ValueError(f"Unknown role: {role!r}")


@dataclass(frozen=True)
class Principal:
    """The authenticated user of a single request."""
    id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return isinstance(self.role, Admin)

    def can(self, permission: str) -> bool:
        return can(self.role, permission)

    def to_session(self) -> Dict[str, Any]:
        permissions = sorted(self.role.permissions) if isinstance(self.role, Staff) else []
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.name,
            "permissions": permissions,
        }

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> "Principal":
        return cls(
            id=int(data["id"]),
            username=data["username"],
            role=parse_role(data.get("role"), data.get("permissions")),
        )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError as e:
        logger.warning(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(
        password.encode('utf-8'),
        bcrypt.gensalt()
    ).decode('utf-8')
