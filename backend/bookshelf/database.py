"""
Bookshelf Backend - Database Engine & Session Factory
=======================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   The engine owns the connection pool; `async_session_factory` hands out
       short-lived AsyncSession objects. The repository opens one session
       per operation, so nothing here is tied to the request lifecycle.
When:  Engine is created at module import; sessions are created per call.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    SQLite (used by the test suite and local runs) manages its own pool
    class, so those options are only passed for server databases.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookshelf.config import settings


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    Pool options from settings are applied to server databases only, and
    only when no `poolclass` override replaces the default queue pool;
    `overrides` are passed straight to create_async_engine (tests use
    this to pin an in-memory SQLite database to a StaticPool).
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not database_url.startswith("sqlite") and "poolclass" not in overrides:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    options.update(overrides)
    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps attributes readable after the
    # transaction closes; results are converted to schemas afterwards.
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables registered on Base.metadata."""
    # Model modules must be imported so their tables are registered
    from bookshelf.models import book  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
