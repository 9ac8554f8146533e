"""
User Repository

Data access layer for user records. Every public operation records a
failure once through the diagnostic sink and re-raises it unchanged.
"""

from typing import Any, List, Mapping, Optional, Union
import logging

from pydantic import ValidationError

from usersvc.core.diagnostics import DiagnosticSink, LoggingDiagnosticSink
from usersvc.core.exceptions import (
    ConstraintViolationException,
    DuplicateException,
    NotFoundException,
    ValidationException,
)
from usersvc.models.base import utcnow
from usersvc.models.user import User
from usersvc.repositories.base import BaseRepository
from usersvc.repositories.executor import QueryExecutor
from usersvc.schemas.user import DeletedUserResponse, UserResponse, UserUpdate

logger = logging.getLogger("USER_REPOSITORY")

USER_COLUMNS = ("id", "name", "email", "role", "created_at", "updated_at")
DELETED_USER_COLUMNS = ("id", "name", "email", "role")


class UserRepository(BaseRepository[User]):
    """
    Repository for user records.

    The existence check and the write in ``update_user`` and ``delete_user``
    are separate store requests. A concurrent email change that slips
    between the uniqueness check and the update is caught by the unique
    constraint on ``users.email`` and reported as DuplicateException.
    """

    def __init__(self, executor: QueryExecutor, sink: Optional[DiagnosticSink] = None):
        super().__init__(User, executor, sink or LoggingDiagnosticSink(logger))

    async def list_users(self) -> List[UserResponse]:
        try:
            rows = await self.get_all(self.columns(*USER_COLUMNS))
            return [UserResponse.model_validate(row) for row in rows]
        except Exception as e:
            self.sink.error("Error fetching all users", e)
            raise

    async def get_user_by_id(self, user_id: int) -> UserResponse:
        try:
            return await self._require_user(user_id)
        except Exception as e:
            self.sink.error(f"Error fetching user {user_id}", e)
            raise

    async def get_user_by_email(self, email: str) -> UserResponse:
        try:
            row = await self.get_by_field("email", email, self.columns(*USER_COLUMNS))
            if row is None:
                raise NotFoundException("User", email)
            return UserResponse.model_validate(row)
        except Exception as e:
            self.sink.error(f"Error fetching user by email {email}", e)
            raise

    async def update_user(
        self,
        user_id: int,
        updates: Union[UserUpdate, Mapping[str, Any]],
    ) -> UserResponse:
        """
        Apply a partial update and return the updated user.

        Args:
            user_id: ID of the user to update
            updates: Fields to change (any of name, email, role)

        Returns:
            UserResponse with the post-update values

        Raises:
            NotFoundException: If no user has the given ID
            ValidationException: If the update is not a mapping or contains unknown or invalid fields
            DuplicateException: If the new email belongs to another user
        """
        try:
            existing = await self._require_user(user_id)
            changes = self._validate_updates(updates)

            new_email = changes.get("email")
            if new_email is not None and new_email != existing.email:
                taken = await self.get_by_field("email", new_email, self.columns("id"))
                if taken is not None:
                    raise DuplicateException("User", "email", new_email)

            values = {**changes, "updated_at": utcnow()}
            try:
                row = await self.update_by_id(user_id, values, self.columns(*USER_COLUMNS))
            except ConstraintViolationException as e:
                if "email" in changes:
                    raise DuplicateException("User", "email", new_email) from e
                raise

            if row is None:
                raise NotFoundException("User", user_id)
            updated = UserResponse.model_validate(row)
        except Exception as e:
            self.sink.error(f"Error updating user {user_id}", e)
            raise

        self.sink.info(f"User {updated.email} updated successfully")
        return updated

    async def delete_user(self, user_id: int) -> DeletedUserResponse:
        """
        Delete a user and return the reduced projection of the removed row.

        Raises:
            NotFoundException: If no user has the given ID
        """
        try:
            await self._require_user(user_id)
            row = await self.delete_by_id(user_id, self.columns(*DELETED_USER_COLUMNS))
            if row is None:
                raise NotFoundException("User", user_id)
            deleted = DeletedUserResponse.model_validate(row)
        except Exception as e:
            self.sink.error(f"Error deleting user {user_id}", e)
            raise

        self.sink.info(f"User {deleted.email} deleted successfully")
        return deleted

    async def _require_user(self, user_id: int) -> UserResponse:
        # Shared by get/update/delete so all three apply the same existence check.
        row = await self.get_or_fail(user_id, self.columns(*USER_COLUMNS))
        return UserResponse.model_validate(row)

    @staticmethod
    def _validate_updates(updates: Union[UserUpdate, Mapping[str, Any]]) -> dict:
        if isinstance(updates, UserUpdate):
            return updates.changes()
        try:
            return UserUpdate.model_validate(dict(updates)).changes()
        except ValidationError as e:
            raise ValidationException(
                "Invalid user update",
                {"errors": e.errors()},
            ) from e
        except (TypeError, ValueError) as e:
            raise ValidationException(
                "User update must be a mapping of field names to values",
                {"error": str(e)},
            ) from e
