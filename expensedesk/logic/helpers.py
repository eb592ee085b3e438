"""Small helpers shared by the record services."""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id(prefix: str) -> str:
    """Return a fresh record id such as ``expense-3f9c0a1b2d4e``."""
    return f"{prefix}-{uuid4().hex[:12]}"


def public_user(user: Optional[dict]) -> Optional[dict]:
    """Strip fields that must never leave the service."""
    if user is None:
        return None
    return {field: value for field, value in user.items() if field != "password_hash"}
