"""Tests for user records and login."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as RequestValidationError

from expensedesk.database.services.record_store import RecordStore, user_email_key, user_key
from expensedesk.database.services.user_service import UserService
from expensedesk.ReqResModels.usermodels import CreateUserRequest, UpdateUserRequest, UserRole
from expensedesk.logic.exceptions import (
    AuthenticationError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)


def create(store: RecordStore, **overrides) -> dict:
    data = {"name": "Sam Lee", "email": "sam@company.com", "password": "secret1"}
    data.update(overrides)
    return UserService.create_user(store, CreateUserRequest(**data))


class TestCreateUser:
    """Tests for UserService.create_user."""

    def test_creates_user_and_email_lookup(self, store: RecordStore) -> None:
        user = create(store)

        assert user["role"] == "employee"
        assert user["company_id"] == "demo-company-001"
        assert store.get(user_email_key("sam@company.com")) == user["id"]
        assert UserService.get_user_by_email(store, "sam@company.com") == user

    def test_password_is_hashed(self, store: RecordStore) -> None:
        user = create(store)
        assert user["password_hash"] != "secret1"
        assert user["password_hash"].startswith("$2")

    def test_user_without_password(self, store: RecordStore) -> None:
        user = create(store, password=None)
        assert "password_hash" not in user

    def test_duplicate_email_rejected(self, store: RecordStore) -> None:
        create(store)
        with pytest.raises(UserAlreadyExistsError):
            create(store, name="Other Sam")

    def test_unknown_manager_rejected(self, store: RecordStore) -> None:
        with pytest.raises(ValidationError):
            create(store, manager_id="manager-404")
        assert UserService.get_user_by_email(store, "sam@company.com") is None

    def test_list_users_skips_email_lookups(self, seeded_store: RecordStore) -> None:
        users = UserService.list_users(seeded_store)
        assert sorted(u["id"] for u in users) == ["admin-001", "employee-001", "manager-001"]


class TestUpdateUser:

    def test_updates_only_given_fields(self, seeded_store: RecordStore) -> None:
        user = UserService.update_user(
            seeded_store, "employee-001", UpdateUserRequest(role=UserRole.MANAGER)
        )

        assert user["role"] == "manager"
        assert user["name"] == "Employee User"
        assert user["manager_id"] == "manager-001"
        assert user["updated_at"]
        assert seeded_store.get(user_key("employee-001"))["role"] == "manager"

    def test_cannot_manage_self(self, seeded_store: RecordStore) -> None:
        with pytest.raises(ValidationError):
            UserService.update_user(seeded_store, "employee-001", UpdateUserRequest(manager_id="employee-001"))

    def test_unknown_manager(self, seeded_store: RecordStore) -> None:
        with pytest.raises(ValidationError):
            UserService.update_user(seeded_store, "employee-001", UpdateUserRequest(manager_id="nobody"))

    def test_unknown_user(self, seeded_store: RecordStore) -> None:
        with pytest.raises(UserNotFoundError):
            UserService.update_user(seeded_store, "nobody", UpdateUserRequest(name="X"))

    @pytest.mark.parametrize("field", ["name", "role", "is_manager_approver"])
    def test_null_rejected_for_required_fields(self, field: str) -> None:
        with pytest.raises(RequestValidationError):
            UpdateUserRequest(**{field: None})

    def test_null_manager_clears_manager(self, seeded_store: RecordStore) -> None:
        user = UserService.update_user(seeded_store, "employee-001", UpdateUserRequest(manager_id=None))

        assert user["manager_id"] is None
        assert user["name"] == "Employee User"
        assert seeded_store.get(user_key("employee-001"))["manager_id"] is None


class TestDeleteUser:

    def test_removes_user_and_lookup(self, store: RecordStore) -> None:
        user = create(store)

        assert UserService.delete_user(store, user["id"]) is True
        assert store.get(user_key(user["id"])) is None
        assert store.get(user_email_key("sam@company.com")) is None
        assert UserService.get_user_by_email(store, "sam@company.com") is None

    def test_keeps_lookup_owned_by_another_user(self, store: RecordStore) -> None:
        first = create(store)
        second = create(store, email="sam.two@company.com")
        # Point the lookup at the second user, as re-seeding a shared email does
        store.set(user_email_key("sam@company.com"), second["id"])

        UserService.delete_user(store, first["id"])

        assert store.get(user_email_key("sam@company.com")) == second["id"]

    def test_email_can_be_reused_after_delete(self, store: RecordStore) -> None:
        user = create(store)
        UserService.delete_user(store, user["id"])
        assert create(store)["id"] != user["id"]

    def test_unknown_user(self, store: RecordStore) -> None:
        with pytest.raises(UserNotFoundError):
            UserService.delete_user(store, "nobody")


class TestAuthenticate:

    def test_valid_credentials(self, seeded_store: RecordStore) -> None:
        user = UserService.authenticate(seeded_store, "manager@company.com", "manager123")
        assert user["id"] == "manager-001"

    def test_wrong_password(self, seeded_store: RecordStore) -> None:
        with pytest.raises(AuthenticationError):
            UserService.authenticate(seeded_store, "manager@company.com", "wrong")

    def test_unknown_email(self, seeded_store: RecordStore) -> None:
        with pytest.raises(AuthenticationError):
            UserService.authenticate(seeded_store, "nobody@company.com", "manager123")

    def test_user_without_password_cannot_log_in(self, store: RecordStore) -> None:
        create(store, password=None)
        with pytest.raises(AuthenticationError):
            UserService.authenticate(store, "sam@company.com", "anything")
