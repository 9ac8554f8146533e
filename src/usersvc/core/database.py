"""
Database connection and session management.

This module handles:
- Async engine creation with connection pooling
- Session factory setup
- Connection health checks
- Table creation for the ORM models

Nothing here is a module-level singleton: callers build an engine from
Settings and pass the resulting session factory to the repositories.
"""

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
import logging

from usersvc.core.config import Settings, get_settings

logger = logging.getLogger('CORE_DATABASE')


def engine_options(settings: Settings, url: str) -> Dict[str, Any]:
    """
    Build keyword arguments for ``create_async_engine``.

    SQLite does not take pool sizing options; an in-memory SQLite database
    must share one connection across sessions or each session would see an
    empty database.

    Args:
        settings: Application settings
        url: Database URL the engine is created for

    Returns:
        dict: Engine keyword arguments
    """
    options: Dict[str, Any] = {'echo': settings.db_echo}
    parsed = make_url(url)

    if parsed.get_backend_name() == 'sqlite':
        if parsed.database in (None, '', ':memory:'):
            options['poolclass'] = StaticPool
            options['connect_args'] = {'check_same_thread': False}
        return options

    options.update({
        'pool_size': settings.db_pool_size,
        'max_overflow': settings.db_max_overflow,
        'pool_timeout': settings.db_pool_timeout,
        'pool_recycle': settings.db_pool_recycle,
        'pool_pre_ping': settings.db_pool_pre_ping,
    })
    return options


def create_engine_from_settings(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine described by the settings.

    Args:
        settings: Application settings (defaults to the cached settings)

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine
    """
    settings = settings or get_settings()
    url = settings.get_database_url()
    logger.info(f"Initializing database connection to: {make_url(url).render_as_string(hide_password=True)}")
    return create_async_engine(url, **engine_options(settings, url))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory whose sessions keep loaded values usable after commit."""
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables for the registered ORM models.

    Idempotent: existing tables are left untouched. Schema migrations are
    managed outside this package.
    """
    from usersvc.models import Base

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise


async def get_database_health(engine: AsyncEngine) -> Dict[str, Any]:
    """
    Check database connection health and return status.

    Returns:
        dict: Health status with connection pool information

    Example:
        {
            "status": "healthy",
            "connection_pool": "Pool size: 5  Connections in pool: 0 ...",
            "database": "users",
        }
    """
    database = engine.url.database
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.fetchone()
        return {
            "status": "healthy",
            "connection_pool": engine.pool.status(),
            "database": database,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "database": database,
        }
