"""
Centralized Test Configuration.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import Base
from tracker.app.models.parcel import ParcelRow  # noqa: F401
from tracker.app.schemas.parcel import Parcel, now_rfc3339
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.services.parcel_store import ParcelStore

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, schema created before and dropped after."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine):
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


@pytest.fixture
def make_parcel():
    """Factory for a registered test parcel; keyword arguments override fields."""
    def _make(**overrides):
        fields = {
            "client": 1000,
            "status": ParcelStatus.REGISTERED,
            "address": "test",
            "created_at": now_rfc3339(),
        }
        fields.update(overrides)
        return Parcel(**fields)
    return _make
