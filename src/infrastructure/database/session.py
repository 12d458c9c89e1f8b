"""Async engine and session factory."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def engine_options(url: str) -> dict[str, Any]:
    """Engine keyword arguments for the given database URL.

    Pool sizing only applies to Postgres. Transaction-mode poolers
    (PgBouncer, Supavisor) cannot use asyncpg's prepared statement cache.
    """
    if not url.startswith("postgresql"):
        return {}

    options: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }
    if "pooler" in url or "pgbouncer" in url:
        options["connect_args"] = {"statement_cache_size": 0}
    return options


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    **engine_options(settings.async_database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for request-scoped raw queries (health checks)."""
    async with async_session_factory() as session:
        yield session
