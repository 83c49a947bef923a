"""Session-per-scope unit of work for independent row writes."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lead_intake.application.interfaces import BuyerUnitOfWork, BuyerWriteScope
from lead_intake.domain.exceptions import StoreUnavailableError
from lead_intake.infrastructure.database.repositories import (
    SQLAlchemyBuyerHistoryRepository,
    SQLAlchemyBuyerRepository,
)


class SQLAlchemyBuyerUnitOfWork(BuyerUnitOfWork):
    """Opens a fresh session (and transaction) for every ``begin()`` scope."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[BuyerWriteScope]:
        async with self._session_factory() as session:
            try:
                yield BuyerWriteScope(
                    buyers=SQLAlchemyBuyerRepository(session),
                    history=SQLAlchemyBuyerHistoryRepository(session),
                )
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise StoreUnavailableError("row commit", exc) from exc
            except Exception:
                await session.rollback()
                raise
