"""Async data access for the users resource."""

from usersvc.core.exceptions import (
    ApplicationException,
    ConstraintViolationException,
    DatabaseException,
    DuplicateException,
    ErrorKind,
    NotFoundException,
    ValidationException,
)
from usersvc.repositories.user_repository import UserRepository

__version__ = "0.1.0"

__all__ = [
    "ApplicationException",
    "ConstraintViolationException",
    "DatabaseException",
    "DuplicateException",
    "ErrorKind",
    "NotFoundException",
    "ValidationException",
    "UserRepository",
]
