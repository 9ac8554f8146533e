"""
ORM Models package.

All models are imported here to ensure they are registered with
``Base.metadata`` before tables are created.

Usage:
    from usersvc.models import Base, User
"""

from usersvc.models.base import Base, TimestampMixin, utcnow
from usersvc.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "utcnow",
    "User",
]
