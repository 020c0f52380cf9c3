"""
Centralized Test Configuration.
"""

import os

# Set env vars before any application modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import random
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from tracker.app.db.session import build_engine, build_session_factory, init_db
from tracker.app.db.parcel_store import ParcelStore
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelRecord, format_timestamp

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed seed keeps generated clients reproducible across runs
RANDOM_SEED = 20240101


@pytest.fixture
async def engine():
    """Fresh in-memory database with the schema created, disposed after the test."""
    test_engine = build_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


# Shared session for fixture data creation: the project session factory,
# then a plain AsyncSession (expire_on_commit=True)
@pytest.fixture(params=["configured", "default"])
async def db_session(request, engine, session_factory):
    if request.param == "configured":
        session = session_factory()
    else:
        session = AsyncSession(engine)

    async with session:
        yield session


@pytest.fixture
def store(db_session):
    return ParcelStore(db_session)


@pytest.fixture
def rng():
    """Injectable random source for test data."""
    return random.Random(RANDOM_SEED)


@pytest.fixture
def make_parcel():
    """Factory for registered parcels, mirroring what callers hand to the store."""
    def _make(client: int = 1000, address: str = "test", **overrides) -> ParcelRecord:
        data = {
            "client": client,
            "status": ParcelStatus.REGISTERED,
            "address": address,
            "created_at": format_timestamp(datetime.now(timezone.utc)),
        }
        data.update(overrides)
        return ParcelRecord(**data)

    return _make
