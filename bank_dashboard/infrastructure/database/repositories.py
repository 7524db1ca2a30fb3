"""Data access layer for durable key/value state"""

from typing import Optional
from sqlalchemy.orm import Session
from bank_dashboard.infrastructure.database.models import KeyValueState


class StateRepository:
    """Repository for serialized values stored under fixed keys"""

    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> Optional[str]:
        """Fetch raw stored value, or None if the key was never written"""
        row = self.db.get(KeyValueState, key)
        return row.value if row else None

    def put_value(self, key: str, value: str) -> None:
        """Insert or overwrite the value under key (caller commits)"""
        row = self.db.get(KeyValueState, key)
        if row is None:
            self.db.add(KeyValueState(key=key, value=value))
        else:
            row.value = value
        self.db.flush()
