"""
IMF Gadget API Database Configuration
Async SQLAlchemy engine and session management.
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from imf_api.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine suited to the configured backend."""
    if database_url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=20,
        max_overflow=40,
        pool_pre_ping=True,    # Check connection health before use
        pool_recycle=3600,     # Recycle connections every hour
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Create async session factory
AsyncSessionLocal = build_session_factory(engine)

# Base class for all models
Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends().
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind: AsyncEngine = engine):
    """
    Initialize database tables.
    For development/testing only - use Alembic migrations in production.
    """
    # Import models so they are registered with Base.metadata
    import imf_api.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections."""
    await engine.dispose()
