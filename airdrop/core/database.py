"""
Database configuration and session management
Uses SQLAlchemy with async support
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
import logging

from airdrop.models import Base
from .config import Settings

logger = logging.getLogger(__name__)

def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database"""
    url = settings.database_url_async

    if url.startswith("sqlite"):
        # SQLite doesn't support connection pooling parameters
        return create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
        )

    # PostgreSQL and other databases support pooling
    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,  # Verify connections before use
    )

def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")

async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
