from sqlalchemy import Column, String, JSON, TIMESTAMP
from expensedesk.database.database import Base
from datetime import datetime, timezone

def _utcnow():
    return datetime.now(timezone.utc)

class Record(Base):
    """A single key-value record. Keys are typed by prefix, e.g. ``expense:<id>``."""
    __tablename__ = "kv_records"

    key = Column(String(512), primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(TIMESTAMP(timezone=True), default=_utcnow, onupdate=_utcnow)
