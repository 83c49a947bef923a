"""Resolves the authenticated principal from the claims a request carries."""

import logging

from lead_intake.application.interfaces import UserRepository
from lead_intake.domain.entities import Principal, UserRole
from lead_intake.domain.exceptions import EntityNotFoundError, UnauthenticatedError

logger = logging.getLogger("lead_intake.access")


class PrincipalResolver:
    """Turns ``(email, id, role)`` claims into a ``Principal``.

    A claimed id that looks like a real identifier is trusted together with
    the claimed role and no lookup is made. Otherwise the user is looked up
    by lower-cased email. This is not a security boundary by itself: every
    service re-checks the access policy against the resolved principal.
    """

    def __init__(self, user_repository: UserRepository, id_min_length: int = 10):
        self._users = user_repository
        self._id_min_length = id_min_length

    async def resolve(
        self,
        email: str | None,
        user_id: str | None = None,
        role: str | None = None,
    ) -> Principal:
        if not email or not email.strip():
            raise UnauthenticatedError(
                "User email not provided in headers. Please ensure you are logged in."
            )
        email = email.strip()

        if user_id and len(user_id.strip()) > self._id_min_length:
            logger.debug("Using provided user id %s for %s", user_id, email)
            return Principal(id=user_id.strip(), email=email, role=UserRole.parse(role))

        logger.debug("Looking up user by email %s", email)
        user = await self._users.get_by_email(email.lower())
        if user is None:
            raise EntityNotFoundError("User", email)
        return Principal(id=user.id, email=user.email, role=user.role)
