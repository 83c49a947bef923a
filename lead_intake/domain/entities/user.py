"""Domain entities for users and the per-request principal."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class UserRole(str, Enum):
    """Roles known to the access policy."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw: str | None) -> "UserRole":
        """Lenient parse for claimed roles: anything unknown is a plain user."""
        if raw:
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.USER


@dataclass
class User:
    """A registered account that can own buyer records."""

    name: str
    email: str
    role: UserRole = UserRole.USER
    is_active: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


@dataclass(frozen=True)
class Principal:
    """The authenticated actor behind a request. Never persisted."""

    id: str
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
