"""
Async database access for projects and endpoint definitions.

The engine is built on first use so that tests can swap DATABASE_URL
before anything connects.
"""
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from app.core.config import settings

Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(db_url: str) -> Dict[str, Any]:
    if db_url.startswith("sqlite"):
        # A file database shares nothing worth pooling
        return {"connect_args": {"check_same_thread": False}, "poolclass": NullPool}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = settings.get_database_url()
        _engine = create_async_engine(db_url, echo=settings.DB_ECHO, **_engine_options(db_url))
    return _engine


def get_session_local() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(), class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; leftover changes are committed when the handler returns"""
    async with get_session_local()() as session:
        try:
            yield session
            if session.new or session.dirty or session.deleted:
                await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    import app.models  # noqa: F401  registers projects and endpoints on Base.metadata

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
