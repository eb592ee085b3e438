"""Key-value access to the ``kv_records`` table.

Every domain service goes through :class:`RecordStore`. Single-key writes
commit immediately; ``set_many`` and ``delete_many`` commit all of their keys
in one transaction so related records (an expense and its approval step, a
user and its email lookup) are never left half written.
"""
from typing import Any, Dict, Iterable, List, Optional
import copy
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expensedesk.database.models.record import Record
from expensedesk.logic.exceptions import DatabaseError

logger = logging.getLogger(__name__)

USER_PREFIX = "user:"
USER_EMAIL_PREFIX = "user:email:"
COMPANY_PREFIX = "company:"
EXPENSE_PREFIX = "expense:"
APPROVAL_STEP_PREFIX = "approval_step:"
APPROVAL_RULE_PREFIX = "approval_rule:"


def user_key(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"

def user_email_key(email: str) -> str:
    return f"{USER_EMAIL_PREFIX}{email}"

def company_key(company_id: str) -> str:
    return f"{COMPANY_PREFIX}{company_id}"

def expense_key(expense_id: str) -> str:
    return f"{EXPENSE_PREFIX}{expense_id}"

def approval_step_key(step_id: str) -> str:
    return f"{APPROVAL_STEP_PREFIX}{step_id}"

def approval_rule_key(rule_id: str) -> str:
    return f"{APPROVAL_RULE_PREFIX}{rule_id}"


class RecordStore:

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or None"""
        try:
            record = self.db.get(Record, key)
        except SQLAlchemyError as e:
            raise self._fail("get", key, e)
        # Copies, so callers editing a value never touch the loaded ORM state
        return copy.deepcopy(record.value) if record is not None else None

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, items: Dict[str, Any]) -> None:
        """Write all items in a single transaction"""
        try:
            for key, value in items.items():
                self.db.merge(Record(key=key, value=value))
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("set", ", ".join(items), e)

    def delete(self, key: str) -> None:
        self.delete_many([key])

    def delete_many(self, keys: Iterable[str]) -> None:
        """Delete all keys in a single transaction; missing keys are ignored"""
        keys = list(keys)
        try:
            self.db.query(Record).filter(Record.key.in_(keys)).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", ", ".join(keys), e)

    def scan_by_prefix(self, prefix: str) -> List[Any]:
        """Return every value whose key starts with ``prefix``, in no particular order"""
        try:
            records = self.db.query(Record).filter(
                Record.key.startswith(prefix, autoescape=True)
            ).order_by(Record.key).all()
        except SQLAlchemyError as e:
            raise self._fail("scan", prefix, e)
        return [copy.deepcopy(record.value) for record in records]

    def _fail(self, operation: str, key: str, error: Exception) -> DatabaseError:
        self.db.rollback()
        logger.error(f"Record store {operation} failed for '{key}': {error}")
        return DatabaseError(f"Record store {operation} failed")
