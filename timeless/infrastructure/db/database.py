"""
Database Configuration
SQLAlchemy async setup (SQLite via aiosqlite, PostgreSQL via asyncpg)
"""

import os
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from timeless.config import settings


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


def normalize_async_url(url: str) -> str:
    """Pick the async driver for plain postgres/sqlite URLs"""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def create_engine_for(url: str, echo: bool = False) -> AsyncEngine:
    url = normalize_async_url(url)
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=3600,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


DATABASE_URL = normalize_async_url(settings.DATABASE_URL)

# Avoid creating the async engine during Alembic autogenerate runs
ALEMBIC_MODE = os.getenv("ALEMBIC_MODE") == "1" or os.getenv("ALEMBIC_CONTEXT") == "1"

if not ALEMBIC_MODE:
    engine = create_engine_for(DATABASE_URL, echo=settings.DEBUG)
    async_session_factory = create_session_factory(engine)
else:
    engine = None
    async_session_factory = None


async def init_db(bind: AsyncEngine | None = None):
    """Initialize database (create tables)"""
    bind = bind or engine
    async with bind.begin() as conn:
        # Import all models here to ensure they're registered
        from timeless.infrastructure.db import models  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections"""
    if engine is not None:
        await engine.dispose()
