"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod

from lead_intake.domain.entities import User


class UserRepository(ABC):
    """Port for user persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Look a user up by email (stored lower-cased)."""
        ...

    @abstractmethod
    async def get_all(self) -> list[User]:
        """All users, oldest first."""
        ...

    @abstractmethod
    async def find_active_admin(self, *, exclude_id: str | None = None) -> User | None:
        """Any active admin other than ``exclude_id``."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        ...
