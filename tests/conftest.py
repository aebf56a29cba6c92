"""Shared test fixtures.

Settings are read at import time, so the environment is prepared before any
src module is imported. Every test gets its own in-memory SQLite database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ["OWNER_ADDRESS"] = "0x" + "a" * 40

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

# Register every table on Base.metadata
import src.em_catalog.infrastructure.db_models  # noqa: E402,F401
import src.em_escrow.infrastructure.db_models  # noqa: E402,F401
import src.em_events.infrastructure.db_models  # noqa: E402,F401
import src.em_gateway.user.db_models  # noqa: E402,F401
import src.em_seller.infrastructure.db_models  # noqa: E402,F401
import src.em_token.infrastructure.db_models  # noqa: E402,F401
import src.em_treasury.infrastructure.db_models  # noqa: E402,F401
from src.em_common.database import Base  # noqa: E402
from tests.support import Marketplace, build_marketplace  # noqa: E402


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def market() -> Marketplace:
    """All services wired to the SQL token ledger with fresh entity locks."""
    return build_marketplace()
