"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lead_intake.config import get_settings
from lead_intake.application.services import UserAdminService
from lead_intake.domain.entities import UserRole
from lead_intake.domain.exceptions import DuplicateEntityError, StoreUnavailableError
from lead_intake.infrastructure.database import Base, engine
from lead_intake.infrastructure.database.session import async_session_factory
from lead_intake.infrastructure.database.repositories import (
    SQLAlchemyBuyerRepository,
    SQLAlchemyUserRepository,
)
from lead_intake.infrastructure.logging.log_config import setup_logging
from lead_intake.presentation.api.errors import register_exception_handlers
from lead_intake.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database named in ``database_url`` if missing.

    Does nothing for non-PostgreSQL URLs.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        return

    url = settings.database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
    db_name = urlparse(url).path.lstrip("/")
    if not db_name:
        return

    maintenance_url = url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_bootstrap_admin() -> None:
    """Create the configured bootstrap admin account when it does not exist yet."""
    settings = get_settings()
    if not settings.bootstrap_admin_email:
        return

    async with async_session_factory() as session:
        service = UserAdminService(
            SQLAlchemyUserRepository(session),
            SQLAlchemyBuyerRepository(session),
        )
        try:
            await service.register_user(
                settings.bootstrap_admin_name,
                settings.bootstrap_admin_email,
                role=UserRole.ADMIN,
            )
            await session.commit()
        except DuplicateEntityError:
            logger.debug("Bootstrap admin %s already exists", settings.bootstrap_admin_email)
        except StoreUnavailableError as exc:
            await session.rollback()
            logger.warning("Could not seed bootstrap admin: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Prepare the database and seed the bootstrap admin."""
    setup_logging()

    await _ensure_database_exists()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await _seed_bootstrap_admin()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lead_intake.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
