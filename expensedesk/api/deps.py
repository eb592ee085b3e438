from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, status as http_status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from expensedesk.config import Config
from expensedesk.database.database import get_db
from expensedesk.database.services.record_store import RecordStore
from expensedesk.logic.ocr import ReceiptExtractor, get_receipt_extractor

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class RequestSession:
    """Per-request caller context: the bearer token and, when the client
    sends ``X-User-Id``, the user acting on the request."""
    token: Optional[str] = None
    user_id: Optional[str] = None


def get_request_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    x_user_id: Optional[str] = Header(None),
) -> RequestSession:
    token = credentials.credentials if credentials else None
    if Config.API_TOKEN and token != Config.API_TOKEN:
        raise HTTPException(
            status_code=http_status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return RequestSession(token=token, user_id=x_user_id)


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


@lru_cache(maxsize=None)
def load_extractor(provider: str) -> ReceiptExtractor:
    """One extractor per provider name; raises ValueError for unknown names"""
    return get_receipt_extractor(provider)


def get_extractor() -> ReceiptExtractor:
    return load_extractor(Config.OCR_PROVIDER)
