"""SQLAlchemy database session and engine configuration."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lead_intake.config import get_settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def configure_sqlite(engine: AsyncEngine) -> None:
    """Make SQLite honour foreign keys and SAVEPOINTs.

    The driver's implicit transaction handling is switched off so SQLAlchemy
    emits BEGIN itself; without that, nested transactions used for
    best-effort history writes do not work.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(connection):
        connection.exec_driver_sql("BEGIN")


def build_engine(database_url: str, *, echo: bool = False, **kwargs) -> AsyncEngine:
    async_url = _get_async_url(database_url)
    new_engine = create_async_engine(async_url, echo=echo, future=True, **kwargs)
    if async_url.startswith("sqlite"):
        configure_sqlite(new_engine)
    return new_engine


settings = get_settings()

engine = build_engine(
    settings.database_url,
    echo=(settings.app_env == "development" and settings.log_level_sql.upper() == "DEBUG"),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an async DB session per request."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
