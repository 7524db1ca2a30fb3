"""Bounded, newest-first buffer of monitored-call outcomes, persisted on every change"""

import json
import logging
import threading
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from bank_dashboard.domain.health import classify_log_event, summarize_health
from bank_dashboard.domain.models import HealthSnapshot, LogEvent, LogEventType, SystemStatus
from bank_dashboard.infrastructure.database.repositories import StateRepository
from bank_dashboard.infrastructure.observability.metrics import record_system_status
from bank_dashboard.utils.date_utils import utc_now_iso

DEFAULT_CAPACITY = 50
DEFAULT_KEY = "sys_logs"


class LogStore:
    """
    Rolling log of monitored network calls.

    One instance per process, seeded from durable storage by load_initial()
    and rewritten to it after every append. System status is derived from
    the current buffer on each read, never stored.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        key: str = DEFAULT_KEY,
        capacity: int = DEFAULT_CAPACITY,
    ):
        self.session_factory = session_factory
        self.key = key
        self.capacity = capacity
        self._logs: List[LogEvent] = []
        # Guards _logs together with its stored copy
        self._lock = threading.Lock()

    @property
    def logs(self) -> Tuple[LogEvent, ...]:
        return tuple(self._logs)

    @property
    def health(self) -> HealthSnapshot:
        return summarize_health(self._logs)

    @property
    def status(self) -> SystemStatus:
        return self.health.status

    def load_initial(self) -> None:
        """Seed the buffer from storage; missing or corrupt state yields an empty buffer"""
        with self._lock:
            self._logs = []
            try:
                self._logs = self._read_stored()
            finally:
                record_system_status(self.status)

    def _read_stored(self) -> List[LogEvent]:
        try:
            with self.session_factory() as db:
                raw = StateRepository(db).get_value(self.key)
        except SQLAlchemyError as e:
            logging.warning(f"Log store unreadable, starting empty: {e}")
            return []

        if raw is None:
            return []

        try:
            entries = json.loads(raw)
            if not isinstance(entries, list):
                raise ValueError("stored log buffer is not a list")
            return [LogEvent.from_dict(entry) for entry in entries][: self.capacity]
        except (ValueError, KeyError, TypeError) as e:
            logging.warning(f"Log store corrupt, starting empty: {e}")
            return []

    def append(
        self,
        endpoint: str,
        status: int,
        latency: int,
        type: Optional[LogEventType] = None,
        message: str = "OK",
    ) -> None:
        """
        Record one event at the front of the buffer.

        The id and timestamp are assigned here; type defaults to the rule
        applied to status and latency. The truncated buffer is persisted
        before returning.
        """
        event = LogEvent(
            id=uuid.uuid4().hex[:12],
            timestamp=utc_now_iso(),
            endpoint=endpoint,
            status=status,
            latency=max(0, int(latency)),
            type=type or classify_log_event(status, latency),
            message=message,
        )
        with self._lock:
            self._logs = [event, *self._logs][: self.capacity]
            self._persist()
            record_system_status(self.status)

    def clear(self) -> None:
        with self._lock:
            self._logs = []
            self._persist()
            record_system_status(self.status)

    def _persist(self) -> None:
        payload = json.dumps([log.to_dict() for log in self._logs])
        try:
            with self.session_factory() as db:
                StateRepository(db).put_value(self.key, payload)
                db.commit()
        except SQLAlchemyError as e:
            # In-memory buffer stays authoritative until the next successful write
            logging.error(f"Failed to persist log store: {e}")
