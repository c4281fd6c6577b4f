"""Database configuration and session management.

This module provides:
- Async SQLAlchemy engine built from settings (PostgreSQL via asyncpg by default)
- Session factory used by the customer directory and analytics store
- Table creation at startup and engine disposal at shutdown
"""

import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from receptionist.config.settings import Settings, settings
from receptionist.config.constants import DB_POOL_SIZE, DB_POOL_MAX_OVERFLOW

logger = logging.getLogger(__name__)


def build_database_url(config: Settings = settings) -> str:
    """DATABASE_URL when given, otherwise an asyncpg URL from the DB_* fields."""
    if config.DATABASE_URL:
        return config.DATABASE_URL
    return (
        f"postgresql+asyncpg://{config.DB_USER}:{config.DB_PASSWORD}"
        f"@{config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}"
    )


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DEBUG, "future": True}
    # SQLite (local runs) has no server-side connection pool to size
    if not url.startswith("sqlite"):
        options.update(
            pool_pre_ping=True,
            pool_size=DB_POOL_SIZE,
            max_overflow=DB_POOL_MAX_OVERFLOW,
        )
    return options


DATABASE_URL = build_database_url()

# Connections are opened lazily on first use
engine = create_async_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base class for models
Base = declarative_base()


async def init_db():
    """Create the customers and call_analytics tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized successfully")


async def close_db():
    """Dispose of pooled connections on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
