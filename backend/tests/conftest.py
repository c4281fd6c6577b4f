import sys
import pytest
from pathlib import Path

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend root (1 level up from tests/) to sys.path so tests can import 'receptionist'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from receptionist.models.database import Base as DBBase


@pytest.fixture
async def session_factory():
    """In-memory SQLite session factory with all tables created.

    Repositories take the factory at construction, so tests never touch the
    Postgres engine configured in settings.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(DBBase.metadata.create_all)

    yield sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    await test_engine.dispose()
