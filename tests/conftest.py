"""
Shared fixtures: an in-memory SQLite store, a recording diagnostic sink and
an executor wrapper that counts the statements a repository issues.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging

import pytest
import pytest_asyncio

from usersvc.core.config import Settings
from usersvc.core.diagnostics import LOGGER_NAMES
from usersvc.core.database import create_engine_from_settings, create_session_factory, init_db
from usersvc.models import User
from usersvc.repositories.executor import SessionQueryExecutor
from usersvc.repositories.user_repository import UserRepository

CREATED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingSink:
    """DiagnosticSink that keeps every event in memory."""

    def __init__(self):
        self.infos = []
        self.errors = []

    def info(self, message):
        self.infos.append(message)

    def error(self, message, cause=None):
        self.errors.append((message, cause))


class CountingExecutor:
    """Wraps a QueryExecutor and records each statement kind it forwards."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    async def select(self, columns, table, where=None, limit=None):
        self.calls.append("select")
        return await self.inner.select(columns, table, where=where, limit=limit)

    async def update(self, table, values, where, returning):
        self.calls.append("update")
        return await self.inner.update(table, values, where, returning)

    async def delete(self, table, where, returning):
        self.calls.append("delete")
        return await self.inner.delete(table, where, returning)

    @property
    def writes(self):
        return [call for call in self.calls if call in ("update", "delete")]


@pytest.fixture
def restore_loggers():
    """Put the usersvc loggers back the way the test found them."""
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in LOGGER_NAMES}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:", _env_file=None)


@pytest_asyncio.fixture
async def engine(settings):
    """In-memory SQLite engine with the users table created."""
    engine = create_engine_from_settings(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def executor(session_factory):
    return CountingExecutor(SessionQueryExecutor(session_factory))


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def repo(executor, sink):
    return UserRepository(executor, sink)


@pytest.fixture
def seed_users(session_factory):
    """Insert users directly, bypassing the repository."""

    async def _seed(*users):
        async with session_factory() as session:
            async with session.begin():
                session.add_all(
                    [
                        User(
                            id=user["id"],
                            name=user.get("name", f"User {user['id']}"),
                            email=user["email"],
                            role=user.get("role", "user"),
                            created_at=CREATED_AT,
                            updated_at=CREATED_AT,
                        )
                        for user in users
                    ]
                )

    return _seed
