"""
Base SQLAlchemy declarative class and common model mixins.

This module provides the foundation for all ORM models in the application.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


# Create base declarative class
Base = declarative_base()


def utcnow() -> datetime:
    """Current time in UTC, evaluated per call."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamp fields.

    Attributes:
        created_at: Timestamp when the record was created (UTC)
        updated_at: Timestamp when the record was last updated (UTC)
    """

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
