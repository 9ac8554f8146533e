"""
Unit tests for repository wiring.
"""

from __future__ import annotations

import logging

import pytest

from usersvc.core.config import Settings
from usersvc.core.dependencies import build_user_repository, open_user_repository
from usersvc.core.diagnostics import LoggingDiagnosticSink
from usersvc.repositories.executor import SessionQueryExecutor
from usersvc.repositories.user_repository import UserRepository

from conftest import RecordingSink


class TestWiring:
    """Tests for build_user_repository and open_user_repository."""

    def test_build_uses_session_executor_and_logging_sink(self, session_factory):
        """Should default to the SQLAlchemy executor and the repository logger."""
        repo = build_user_repository(session_factory)

        assert isinstance(repo, UserRepository)
        assert isinstance(repo.executor, SessionQueryExecutor)
        assert isinstance(repo.sink, LoggingDiagnosticSink)
        assert repo.sink.logger is logging.getLogger("USER_REPOSITORY")

    def test_build_accepts_custom_sink(self, session_factory):
        """Should use the supplied sink."""
        sink = RecordingSink()
        assert build_user_repository(session_factory, sink).sink is sink

    @pytest.mark.asyncio
    async def test_open_user_repository(self, settings, restore_loggers):
        """Should yield a working repository over a freshly initialized store."""
        sink = RecordingSink()

        async with open_user_repository(settings, sink) as repo:
            assert await repo.list_users() == []

        assert sink.errors == []

    @pytest.mark.asyncio
    async def test_open_user_repository_applies_log_settings(self, restore_loggers):
        """Should configure the usersvc loggers from log_level and log_format."""
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            log_level="WARNING",
            log_format="%(name)s %(message)s",
            _env_file=None,
        )

        async with open_user_repository(settings, RecordingSink()):
            logger = logging.getLogger("USER_REPOSITORY")
            marked = [h for h in logger.handlers if getattr(h, "_usersvc_handler", False)]

            assert logger.level == logging.WARNING
            assert len(marked) == 1
            assert marked[0].formatter._fmt == "%(name)s %(message)s"
