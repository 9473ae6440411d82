"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy with async support (aiosqlite by default, asyncpg for PostgreSQL).
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tracker.app.core.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


async def init_db(bind=None):
    """
    Create the tables registered on Base.

    Args:
        bind: Async engine to create tables on, defaults to the module engine
    """
    # Register models with Base before create_all
    from tracker.app.models.parcel import ParcelRow  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
