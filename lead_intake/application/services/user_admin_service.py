"""Application service for user registration and admin-side account management."""

import logging
from dataclasses import dataclass

from lead_intake.application.interfaces import BuyerRepository, UserRepository
from lead_intake.domain import access_policy
from lead_intake.domain.entities import Principal, User, UserRole
from lead_intake.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class UserDeletion:
    user: User
    owned_buyers: int
    transferred_to: User | None

    @property
    def message(self) -> str:
        if self.owned_buyers and self.transferred_to is not None:
            return f"User deleted and {self.owned_buyers} buyers transferred"
        if self.owned_buyers:
            return f"User deleted and {self.owned_buyers} buyers left without an owner"
        return "User deleted successfully"


class UserAdminService:
    """User lifecycle rules.

    Deleting a user never deletes their buyers: they move to another active
    admin when there is one, otherwise they stay behind with no owner.
    """

    def __init__(self, users: UserRepository, buyers: BuyerRepository):
        self._users = users
        self._buyers = buyers

    async def register_user(
        self, name: str, email: str, role: UserRole = UserRole.USER
    ) -> User:
        email = email.strip().lower()
        if await self._users.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)
        user = await self._users.create(User(name=name, email=email, role=role))
        logger.info("Registered user %s (%s)", user.email, user.role.value)
        return user

    async def list_users(self, principal: Principal) -> list[User]:
        access_policy.ensure_admin(principal)
        return await self._users.get_all()

    async def update_user(
        self,
        principal: Principal,
        user_id: str,
        *,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> User:
        access_policy.ensure_admin(principal)
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        access_policy.ensure_can_change_role(principal, user_id, role)

        if role is not None:
            user.role = role
        if is_active is not None:
            user.is_active = is_active
        user.touch()
        return await self._users.update(user)

    async def delete_user(self, principal: Principal, user_id: str) -> UserDeletion:
        access_policy.ensure_can_delete_user(principal, user_id)
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)

        owned = await self._buyers.count_owned_by(user_id)
        recipient: User | None = None
        if owned:
            recipient = await self._users.find_active_admin(exclude_id=user_id)
            moved = await self._buyers.reassign_owner(
                user_id, recipient.id if recipient else None
            )
            if recipient:
                logger.info("Transferred %d buyers from %s to %s", moved, user.email, recipient.email)
            else:
                logger.warning("No other admin found; %d buyers of %s orphaned", moved, user.email)

        if not await self._users.delete(user_id):
            raise EntityNotFoundError("User", user_id)
        logger.info("User %s deleted by %s", user.email, principal.email)
        return UserDeletion(user=user, owned_buyers=owned, transferred_to=recipient)
