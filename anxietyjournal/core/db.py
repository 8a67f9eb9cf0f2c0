"""
Database session management.

Provides explicit async ORM session handling with SQLAlchemy + aiosqlite.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from anxietyjournal.core.config import Config
from anxietyjournal.core.models import Base


def get_engine(config: Config) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Uses SQLite with WAL mode for better concurrency.
    """
    db_path = Path(config.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")

    # Enable WAL mode on every new DBAPI connection
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide transactional scope around a series of operations.

    Usage:
        async with session_scope(factory) as session:
            session.add(row)
    """
    session = factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
