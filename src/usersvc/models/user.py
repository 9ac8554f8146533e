"""
User ORM model.

Stores the user records read, updated and deleted by the user repository.
"""

from sqlalchemy import Column, Integer, String

from usersvc.models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User record with basic identity fields."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
