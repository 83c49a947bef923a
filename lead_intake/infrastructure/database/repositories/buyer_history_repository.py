"""SQLAlchemy implementation of the append-only BuyerHistoryRepository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lead_intake.application.interfaces import BuyerHistoryRepository
from lead_intake.domain.entities import HistoryEntry, change_from_diff
from lead_intake.infrastructure.database.errors import translate_store_errors
from lead_intake.infrastructure.database.models import BuyerHistoryModel


class SQLAlchemyBuyerHistoryRepository(BuyerHistoryRepository):
    """History rows are inserted inside a SAVEPOINT.

    A failed insert rolls back only the savepoint, leaving the surrounding
    buyer mutation intact.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: BuyerHistoryModel) -> HistoryEntry:
        return HistoryEntry(
            id=model.id,
            buyer_id=model.buyer_id,
            changed_by=model.changed_by,
            changed_at=model.changed_at,
            change=change_from_diff(model.diff),
        )

    @translate_store_errors("history append")
    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        async with self._session.begin_nested():
            self._session.add(
                BuyerHistoryModel(
                    id=entry.id,
                    buyer_id=entry.buyer_id,
                    changed_by=entry.changed_by,
                    changed_at=entry.changed_at,
                    diff=entry.diff,
                )
            )
        return entry

    @translate_store_errors("history listing")
    async def list_for_buyer(self, buyer_id: str, limit: int = 10) -> list[HistoryEntry]:
        result = await self._session.execute(
            select(BuyerHistoryModel)
            .where(BuyerHistoryModel.buyer_id == buyer_id)
            .order_by(BuyerHistoryModel.changed_at.desc())
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]
