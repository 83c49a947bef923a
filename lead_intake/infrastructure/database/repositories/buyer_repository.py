"""Concrete repository implementation for Buyer backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lead_intake.application.interfaces import BuyerRepository
from lead_intake.domain.entities import (
    Bhk,
    Buyer,
    BuyerFilter,
    BuyerStatus,
    City,
    PropertyType,
    Purpose,
    Source,
    Timeline,
)
from lead_intake.infrastructure.database.errors import translate_store_errors
from lead_intake.infrastructure.database.models import BuyerModel


class SQLAlchemyBuyerRepository(BuyerRepository):
    """Implements the BuyerRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: BuyerModel) -> Buyer:
        """Map ORM model → domain entity."""
        return Buyer(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            phone=model.phone,
            city=City(model.city),
            property_type=PropertyType(model.property_type),
            bhk=Bhk(model.bhk) if model.bhk else None,
            purpose=Purpose(model.purpose),
            budget_min=model.budget_min,
            budget_max=model.budget_max,
            timeline=Timeline(model.timeline),
            source=Source(model.source),
            status=BuyerStatus(model.status),
            notes=model.notes,
            tags=list(model.tags or []),
            owner_id=model.owner_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: BuyerModel, entity: Buyer) -> None:
        """Copy every mutable field of the entity onto the model."""
        model.full_name = entity.full_name
        model.email = entity.email
        model.phone = entity.phone
        model.city = entity.city.value
        model.property_type = entity.property_type.value
        model.bhk = entity.bhk.value if entity.bhk else None
        model.purpose = entity.purpose.value
        model.budget_min = entity.budget_min
        model.budget_max = entity.budget_max
        model.timeline = entity.timeline.value
        model.source = entity.source.value
        model.status = entity.status.value
        model.notes = entity.notes
        model.tags = list(entity.tags)
        model.updated_at = entity.updated_at

    def _filtered(self, stmt, filters: BuyerFilter, owner_id: str | None):
        if owner_id is not None:
            stmt = stmt.where(BuyerModel.owner_id == owner_id)
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    BuyerModel.full_name.ilike(pattern),
                    BuyerModel.phone.ilike(pattern),
                    BuyerModel.email.ilike(pattern),
                )
            )
        if filters.city is not None:
            stmt = stmt.where(BuyerModel.city == filters.city.value)
        if filters.status is not None:
            stmt = stmt.where(BuyerModel.status == filters.status.value)
        if filters.property_type is not None:
            stmt = stmt.where(BuyerModel.property_type == filters.property_type.value)
        return stmt

    @translate_store_errors("buyer lookup")
    async def get_by_id(self, buyer_id: str) -> Buyer | None:
        result = await self._session.get(BuyerModel, buyer_id)
        return self._to_entity(result) if result else None

    @translate_store_errors("buyer listing")
    async def get_page(
        self,
        filters: BuyerFilter,
        *,
        owner_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Buyer], int]:
        stmt = self._filtered(select(BuyerModel), filters, owner_id)
        stmt = stmt.order_by(BuyerModel.updated_at.desc()).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        items = [self._to_entity(row) for row in result.scalars().all()]

        count_stmt = self._filtered(
            select(func.count()).select_from(BuyerModel), filters, owner_id
        )
        total = (await self._session.execute(count_stmt)).scalar_one()
        return items, total

    @translate_store_errors("buyer export")
    async def get_all(self, *, owner_id: str | None = None) -> list[Buyer]:
        stmt = select(BuyerModel)
        if owner_id is not None:
            stmt = stmt.where(BuyerModel.owner_id == owner_id)
        stmt = stmt.order_by(BuyerModel.updated_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    @translate_store_errors("buyer create")
    async def create(self, buyer: Buyer) -> Buyer:
        model = BuyerModel(id=buyer.id, owner_id=buyer.owner_id, created_at=buyer.created_at)
        self._apply(model, buyer)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    @translate_store_errors("buyer update")
    async def update(self, buyer: Buyer) -> Buyer:
        model = await self._session.get(BuyerModel, buyer.id)
        if model is None:
            raise ValueError(f"Buyer {buyer.id} not found in database")
        self._apply(model, buyer)
        await self._session.flush()
        return self._to_entity(model)

    @translate_store_errors("buyer delete")
    async def delete(self, buyer_id: str) -> Buyer | None:
        model = await self._session.get(BuyerModel, buyer_id)
        if model is None:
            return None
        deleted = self._to_entity(model)
        await self._session.delete(model)
        await self._session.flush()
        return deleted

    @translate_store_errors("buyer reassignment")
    async def reassign_owner(self, from_owner_id: str, to_owner_id: str | None) -> int:
        stmt = (
            update(BuyerModel)
            .where(BuyerModel.owner_id == from_owner_id)
            .values(owner_id=to_owner_id, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    @translate_store_errors("buyer count")
    async def count_owned_by(self, owner_id: str) -> int:
        stmt = select(func.count()).select_from(BuyerModel).where(BuyerModel.owner_id == owner_id)
        return (await self._session.execute(stmt)).scalar_one()
