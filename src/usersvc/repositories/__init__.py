"""
Repositories package.

This package contains the data access layer following the Repository Pattern.
Repositories issue statements through a QueryExecutor and report operational
events through a DiagnosticSink, both supplied at construction.

Usage:
    from usersvc.core.database import create_engine_from_settings, create_session_factory
    from usersvc.repositories import SessionQueryExecutor, UserRepository

    engine = create_engine_from_settings(settings)
    repo = UserRepository(SessionQueryExecutor(create_session_factory(engine)))
    users = await repo.list_users()
"""

from usersvc.repositories.base import BaseRepository
from usersvc.repositories.executor import QueryExecutor, SessionQueryExecutor
from usersvc.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "QueryExecutor",
    "SessionQueryExecutor",
    "UserRepository",
]
