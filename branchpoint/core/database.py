"""Database connection and session management for the SQL document store"""
import logging
from typing import Optional
from urllib.parse import urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from branchpoint.core.config import settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def mask_url(url: str) -> str:
    """Mask the password of a database URL for logging"""
    try:
        parsed = urlparse(url)
        if parsed.password:
            netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@")
            return urlunparse(parsed._replace(netloc=netloc))
        return url
    except ValueError:
        return "***"


def normalize_async_url(url: str) -> str:
    """Make sure a PostgreSQL/SQLite URL uses an async driver"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://") and "+aiosqlite" not in url:
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def create_engine(url: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the document store.

    Pool sizing only applies to server databases; SQLite uses
    SQLAlchemy's default pool for its driver.
    """
    database_url = normalize_async_url(url or settings.database_url)
    kwargs = {"future": True}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
        )

    logger.info(f"Creating database engine for {mask_url(database_url)}")
    return create_async_engine(database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create an async session factory bound to an engine"""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables (development and tests; production uses Alembic)"""
    # Import models so they register on Base.metadata
    from branchpoint.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
