"""
Pydantic schemas package.

Usage:
    from usersvc.schemas import UserResponse, UserUpdate
"""

from usersvc.schemas.user import DeletedUserResponse, UserResponse, UserUpdate

__all__ = [
    "DeletedUserResponse",
    "UserResponse",
    "UserUpdate",
]
