"""Concrete repository implementation for User backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lead_intake.application.interfaces import UserRepository
from lead_intake.domain.entities import User, UserRole
from lead_intake.infrastructure.database.errors import translate_store_errors
from lead_intake.infrastructure.database.models import UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @translate_store_errors("user lookup")
    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    @translate_store_errors("user lookup")
    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email.lower()).limit(1)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @translate_store_errors("user listing")
    async def get_all(self) -> list[User]:
        result = await self._session.execute(select(UserModel).order_by(UserModel.created_at))
        return [self._to_entity(m) for m in result.scalars().all()]

    @translate_store_errors("admin lookup")
    async def find_active_admin(self, *, exclude_id: str | None = None) -> User | None:
        stmt = select(UserModel).where(
            UserModel.role == UserRole.ADMIN.value,
            UserModel.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await self._session.execute(stmt.order_by(UserModel.created_at).limit(1))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @translate_store_errors("user create")
    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email.lower(),
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    @translate_store_errors("user update")
    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} not found in database")
        model.name = user.name
        model.role = user.role.value
        model.is_active = user.is_active
        model.updated_at = user.updated_at
        await self._session.flush()
        return self._to_entity(model)

    @translate_store_errors("user delete")
    async def delete(self, user_id: str) -> bool:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
