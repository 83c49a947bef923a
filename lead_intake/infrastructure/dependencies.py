"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lead_intake.config import get_settings
from lead_intake.application.services import (
    BulkTransferService,
    BuyerService,
    HistoryRecorder,
    PrincipalResolver,
    UserAdminService,
)
from lead_intake.domain.entities import Principal
from lead_intake.domain.exceptions import (
    EntityNotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from lead_intake.infrastructure.database.session import async_session_factory, get_db_session
from lead_intake.infrastructure.database.repositories import (
    SQLAlchemyBuyerHistoryRepository,
    SQLAlchemyBuyerRepository,
    SQLAlchemyUserRepository,
)
from lead_intake.infrastructure.database.unit_of_work import SQLAlchemyBuyerUnitOfWork


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Factory for sessions that live outside the request session."""
    return async_session_factory


async def get_principal_resolver(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PrincipalResolver, None]:
    """Provides a PrincipalResolver backed by the user table."""
    settings = get_settings()
    yield PrincipalResolver(
        SQLAlchemyUserRepository(session),
        id_min_length=settings.principal_id_min_length,
    )


async def get_current_principal(
    x_user_email: str | None = Header(None),
    x_user_id: str | None = Header(None),
    x_user_role: str | None = Header(None),
    resolver: PrincipalResolver = Depends(get_principal_resolver),
    session: AsyncSession = Depends(get_db_session),
) -> Principal:
    """Resolves the request's principal from the ``x-user-*`` headers.

    Resolution failures are mapped to HTTP errors here, before the
    endpoint body runs.
    """
    try:
        return await resolver.resolve(x_user_email, x_user_id, x_user_role)
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except EntityNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"User not found with email: {x_user_email}. Please register first.",
        )
    except StoreUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    finally:
        # The lookup is read-only. Ending its transaction releases SQLite's
        # shared lock so import rows can commit from their own sessions.
        await session.rollback()


async def get_buyer_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BuyerService, None]:
    """Provides a BuyerService with its buyer and history repositories wired up."""
    settings = get_settings()
    history = HistoryRecorder(SQLAlchemyBuyerHistoryRepository(session))
    yield BuyerService(
        SQLAlchemyBuyerRepository(session),
        history,
        history_limit=settings.history_page_size,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


async def get_bulk_transfer_service(
    session: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[BulkTransferService, None]:
    """Export reads through the request session; import rows get their own sessions."""
    yield BulkTransferService(
        SQLAlchemyBuyerRepository(session),
        SQLAlchemyBuyerUnitOfWork(session_factory),
    )


async def get_user_admin_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserAdminService, None]:
    """Provides a UserAdminService over the user and buyer repositories."""
    yield UserAdminService(
        SQLAlchemyUserRepository(session),
        SQLAlchemyBuyerRepository(session),
    )
