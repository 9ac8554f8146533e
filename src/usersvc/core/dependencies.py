"""
Wiring helpers that assemble repositories from settings.

Repositories receive their executor and diagnostic sink explicitly; these
helpers are the one place that decides which concrete implementations are
used.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from usersvc.core.config import Settings, get_settings
from usersvc.core.database import create_engine_from_settings, create_session_factory, init_db
from usersvc.core.diagnostics import DiagnosticSink, LoggingDiagnosticSink, configure_logging
from usersvc.repositories.executor import SessionQueryExecutor
from usersvc.repositories.user_repository import UserRepository

logger = logging.getLogger('CORE_DEPENDENCIES')


def build_user_repository(
    session_factory: async_sessionmaker,
    sink: Optional[DiagnosticSink] = None,
) -> UserRepository:
    """
    Build a UserRepository on top of a session factory.

    Args:
        session_factory: Factory producing AsyncSession instances
        sink: Diagnostic sink (defaults to the USER_REPOSITORY logger)

    Returns:
        UserRepository: Repository ready for use
    """
    return UserRepository(
        SessionQueryExecutor(session_factory),
        sink or LoggingDiagnosticSink(name="USER_REPOSITORY"),
    )


@asynccontextmanager
async def open_user_repository(
    settings: Optional[Settings] = None,
    sink: Optional[DiagnosticSink] = None,
) -> AsyncIterator[UserRepository]:
    """
    Configure logging, create an engine, ensure tables exist and yield a
    UserRepository.

    The engine is disposed when the context exits.

    Example:
        async with open_user_repository() as users:
            user = await users.get_user_by_id(1)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    engine = create_engine_from_settings(settings)
    try:
        await init_db(engine)
        yield build_user_repository(create_session_factory(engine), sink)
    finally:
        await engine.dispose()
        logger.debug("Database engine disposed")
