"""
Unit tests for the user schemas.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from usersvc.schemas.user import DeletedUserResponse, UserResponse, UserUpdate


class TestUserUpdate:
    """Tests for the partial update schema."""

    def test_changes_only_include_supplied_fields(self):
        """Should drop fields the caller did not set."""
        assert UserUpdate(name="X").changes() == {"name": "X"}
        assert UserUpdate().changes() == {}

    def test_role_may_be_cleared(self):
        """Should keep an explicit null role."""
        assert UserUpdate(role=None).changes() == {"role": None}

    @pytest.mark.parametrize("field", ["name", "email"])
    def test_required_columns_may_not_be_null(self, field):
        """Should reject null for name and email."""
        with pytest.raises(ValidationError):
            UserUpdate.model_validate({field: None})

    @pytest.mark.parametrize("field", ["id", "created_at", "updated_at", "password"])
    def test_rejects_unknown_and_immutable_fields(self, field):
        """Should refuse fields outside the mutable set."""
        with pytest.raises(ValidationError):
            UserUpdate.model_validate({field: 1})

    def test_rejects_empty_name(self):
        """Should enforce a minimum name length."""
        with pytest.raises(ValidationError):
            UserUpdate(name="")


class TestProjections:
    """Tests for the response projections."""

    def test_user_response_from_row(self):
        """Should build the full projection from a row mapping."""
        now = datetime(2024, 1, 1)
        row = {"id": 1, "name": "A", "email": "a@x.com", "role": None, "created_at": now, "updated_at": now}

        user = UserResponse.model_validate(row)

        assert user.model_dump() == row

    def test_deleted_projection_omits_timestamps(self):
        """Should carry only id, name, email and role."""
        deleted = DeletedUserResponse.model_validate({"id": 2, "name": "B", "email": "b@x.com", "role": "admin"})

        assert set(deleted.model_dump()) == {"id", "name", "email", "role"}
