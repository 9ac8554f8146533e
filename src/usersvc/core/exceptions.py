"""
Custom exceptions for the application.

This module defines domain-specific exceptions for better error handling
and more meaningful error messages throughout the application.

Every exception carries an ErrorKind tag so callers can branch on
``exc.kind`` instead of matching message strings.
"""

from enum import Enum
from typing import Optional, Any, Dict


class ErrorKind(str, Enum):
    """Tag identifying the category of an application error."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE_FAILURE = "store_failure"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseException(ApplicationException):
    """Exception raised for database-related errors."""

    kind = ErrorKind.STORE_FAILURE


class ConstraintViolationException(DatabaseException):
    """Exception raised when the store rejects a write on an integrity constraint."""
    pass


class ValidationException(ApplicationException):
    """Exception raised for validation errors."""

    kind = ErrorKind.VALIDATION


class NotFoundException(ApplicationException):
    """Exception raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} not found: {identifier}"
        super().__init__(message, {"resource": resource, "identifier": identifier})


class DuplicateException(ApplicationException):
    """Exception raised when a write would duplicate a unique value."""

    kind = ErrorKind.CONFLICT

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} already exists with {field}: {value}"
        super().__init__(message, {"resource": resource, "field": field, "value": value})


class ConfigurationException(ApplicationException):
    """Exception raised for configuration-related errors."""

    kind = ErrorKind.CONFIGURATION
