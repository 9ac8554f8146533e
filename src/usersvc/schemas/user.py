"""
User Pydantic Schemas
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class UserUpdate(BaseModel):
    """Partial set of mutable user fields applied by an update."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    role: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", "email")
    @classmethod
    def not_null(cls, value: Optional[str], info) -> str:
        if value is None:
            raise ValueError(f"{info.field_name} may not be null")
        return value

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class UserBase(BaseModel):
    """Identity fields shared by the user projections."""

    id: int
    name: str
    email: str
    role: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DeletedUserResponse(UserBase):
    """Projection returned for a deleted user."""


class UserResponse(UserBase):
    """Full user projection."""

    created_at: datetime
    updated_at: datetime
