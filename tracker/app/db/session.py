"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support. SQLite (aiosqlite) is the default
engine; PostgreSQL (asyncpg) works with the same code.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings

# Create declarative base for models
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool sizing from settings is only applied to server databases;
    SQLite picks its own pool class.
    """
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    if not is_sqlite:
        kwargs.setdefault("pool_size", settings.db_pool_size)
        kwargs.setdefault("max_overflow", settings.db_max_overflow)

    return create_async_engine(url, echo=echo, **kwargs)


def build_session_factory(async_engine: AsyncEngine) -> async_sessionmaker:
    """Session factory with the settings every caller of the store expects."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Create async session factory
AsyncSessionLocal = build_session_factory(engine)


async def init_db(async_engine: AsyncEngine = None) -> None:
    """Create all tables registered on ``Base`` if they do not exist yet."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import Parcel  # noqa: F401

    async with (async_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """
    Dependency-style provider for database sessions.

    Yields an async database session and ensures it's properly closed.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
