from typing import List, Optional
import logging

import bcrypt

from expensedesk.config import Config
from expensedesk.database.services.record_store import (
    RecordStore,
    USER_PREFIX,
    user_key,
    user_email_key,
)
from expensedesk.logic.helpers import new_id, utcnow_iso
from expensedesk.ReqResModels.usermodels import CreateUserRequest, UpdateUserRequest
from expensedesk.logic.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    ValidationError,
    AuthenticationError,
)

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=Config.BCRYPT_ROUNDS)).decode('utf-8')


class UserService:

    @staticmethod
    def get_user_by_id(store: RecordStore, user_id: str) -> Optional[dict]:
        return store.get(user_key(user_id))

    @staticmethod
    def get_user_by_email(store: RecordStore, email: str) -> Optional[dict]:
        """Resolve a user through the email lookup record"""
        user_id = store.get(user_email_key(email))
        if not user_id:
            return None
        return store.get(user_key(user_id))

    @staticmethod
    def list_users(store: RecordStore) -> List[dict]:
        """All user records; the email lookup records share the prefix and are skipped"""
        return [
            value for value in store.scan_by_prefix(USER_PREFIX)
            if isinstance(value, dict) and value.get("id")
        ]

    @staticmethod
    def create_user(store: RecordStore, request: CreateUserRequest) -> dict:
        """Create a new user together with its email lookup record"""
        email = str(request.email)
        if store.get(user_email_key(email)):
            raise UserAlreadyExistsError(f"User with email '{email}' already exists")

        if request.manager_id and not store.get(user_key(request.manager_id)):
            raise ValidationError(f"Manager with ID {request.manager_id} not found")

        user = {
            "id": new_id("user"),
            "email": email,
            "name": request.name,
            "role": request.role.value,
            "manager_id": request.manager_id,
            "company_id": request.company_id or Config.DEFAULT_COMPANY_ID,
            "is_manager_approver": request.is_manager_approver,
            "created_at": utcnow_iso(),
        }
        if request.password:
            user["password_hash"] = hash_password(request.password)

        store.set_many({
            user_key(user["id"]): user,
            user_email_key(email): user["id"],
        })
        logger.info(f"Created user {user['id']} ({user['role']})")
        return user

    @staticmethod
    def update_user(store: RecordStore, user_id: str, request: UpdateUserRequest) -> dict:
        """Apply admin edits: name, role, manager and approver flag"""
        user = store.get(user_key(user_id))
        if not user:
            raise UserNotFoundError(f"User with ID {user_id} not found")

        update_data = request.model_dump(exclude_unset=True)
        manager_id = update_data.get("manager_id")
        if manager_id is not None:
            if manager_id == user_id:
                raise ValidationError("A user cannot be their own manager")
            if not store.get(user_key(manager_id)):
                raise ValidationError(f"Manager with ID {manager_id} not found")

        for field, value in update_data.items():
            if field == 'role' and hasattr(value, 'value'):
                value = value.value
            user[field] = value
        user["updated_at"] = utcnow_iso()

        store.set(user_key(user_id), user)
        logger.info(f"Updated user {user_id}: {sorted(update_data)}")
        return user

    @staticmethod
    def delete_user(store: RecordStore, user_id: str) -> bool:
        """Delete the user record and its email lookup in one transaction.

        The lookup is only removed while it still points at this user.
        """
        user = store.get(user_key(user_id))
        if not user:
            raise UserNotFoundError(f"User with ID {user_id} not found")

        keys = [user_key(user_id)]
        if store.get(user_email_key(user["email"])) == user_id:
            keys.append(user_email_key(user["email"]))
        store.delete_many(keys)
        logger.info(f"Deleted user {user_id}")
        return True

    @staticmethod
    def authenticate(store: RecordStore, email: str, password: str) -> dict:
        user = UserService.get_user_by_email(store, email)
        password_hash = user.get("password_hash") if user else None
        if not password_hash or not bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8')):
            logger.warning(f"Failed login for {email}")
            raise AuthenticationError("Invalid credentials")
        return user
