"""Unit tests for the rolling log store"""

import json
import threading
import time
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from bank_dashboard.domain.models import LogEventType, SystemStatus
from bank_dashboard.infrastructure.database.repositories import StateRepository
from bank_dashboard.infrastructure.storage.log_store import LogStore


def stored_value(session_factory, key="sys_logs"):
    with session_factory() as db:
        return StateRepository(db).get_value(key)


def write_value(session_factory, value, key="sys_logs"):
    with session_factory() as db:
        StateRepository(db).put_value(key, value)
        db.commit()


def test_append_assigns_id_timestamp_and_type(log_store: LogStore):
    """Test append fills id, timestamp and derives the type"""
    log_store.append(endpoint="/api/a", status=200, latency=2500)

    event = log_store.logs[0]
    assert event.id
    assert event.timestamp.endswith("Z")
    assert event.type is LogEventType.RISK
    assert event.message == "OK"


def test_append_keeps_explicit_type(log_store: LogStore):
    log_store.append(endpoint="/api/a", status=200, latency=10, type=LogEventType.ERROR, message="boom")
    assert log_store.logs[0].type is LogEventType.ERROR


def test_append_prepends_newest(log_store: LogStore):
    """Test most recent append is always at index 0"""
    log_store.append(endpoint="/first", status=200, latency=1)
    log_store.append(endpoint="/second", status=200, latency=1)

    assert [e.endpoint for e in log_store.logs] == ["/second", "/first"]
    assert log_store.logs[0].id != log_store.logs[1].id


def test_capacity_is_fifty(log_store: LogStore):
    """Test store never exceeds 50 entries and drops the oldest"""
    for i in range(60):
        log_store.append(endpoint=f"/call/{i}", status=200, latency=1)

    assert len(log_store.logs) == 50
    assert log_store.logs[0].endpoint == "/call/59"
    assert log_store.logs[-1].endpoint == "/call/10"


def test_append_persists_truncated_buffer(session_factory, log_store: LogStore):
    """Test every append rewrites the stored buffer"""
    for i in range(55):
        log_store.append(endpoint=f"/call/{i}", status=200, latency=1)

    stored = json.loads(stored_value(session_factory))
    assert len(stored) == 50
    assert stored[0]["endpoint"] == "/call/54"
    assert stored[0]["type"] == "SUCCESS"


def test_load_initial_restores_previous_session(session_factory, log_store: LogStore):
    """Test logs survive a restart"""
    log_store.append(endpoint="/before-restart", status=503, latency=20)

    restored = LogStore(session_factory)
    restored.load_initial()

    assert [e.endpoint for e in restored.logs] == ["/before-restart"]
    assert restored.logs[0] == log_store.logs[0]


def test_load_initial_missing_state_is_empty(session_factory):
    store = LogStore(session_factory)
    store.load_initial()
    assert store.logs == ()
    assert store.status is SystemStatus.OK


def test_load_initial_corrupt_json_is_empty(session_factory):
    """Test corrupt storage does not crash"""
    write_value(session_factory, "{not json")

    store = LogStore(session_factory)
    store.load_initial()

    assert store.logs == ()


def test_load_initial_wrong_shape_is_empty(session_factory):
    write_value(session_factory, json.dumps({"logs": []}))
    store = LogStore(session_factory)
    store.load_initial()
    assert store.logs == ()

    write_value(session_factory, json.dumps([{"id": "x"}]))
    store.load_initial()
    assert store.logs == ()


def test_load_initial_database_error_is_empty(session_factory):
    store = LogStore(session_factory)
    with patch.object(StateRepository, "get_value", side_effect=OperationalError("SELECT", {}, Exception("locked"))):
        store.load_initial()
    assert store.logs == ()


def test_persist_failure_keeps_memory_buffer(log_store: LogStore):
    """Test a failed write does not lose the in-memory event"""
    with patch.object(StateRepository, "put_value", side_effect=OperationalError("UPDATE", {}, Exception("disk full"))):
        log_store.append(endpoint="/api/a", status=200, latency=1)

    assert len(log_store.logs) == 1


def test_status_follows_log_changes(session_factory, log_store: LogStore):
    """Test status is recomputed from the current buffer"""
    assert log_store.status is SystemStatus.OK

    for _ in range(3):
        log_store.append(endpoint="/api/a", status=500, latency=10)
    assert log_store.status is SystemStatus.CRITICAL

    log_store.clear()
    assert log_store.status is SystemStatus.OK
    assert json.loads(stored_value(session_factory)) == []


def test_logs_view_is_read_only(log_store: LogStore):
    log_store.append(endpoint="/api/a", status=200, latency=1)
    assert isinstance(log_store.logs, tuple)


def test_concurrent_appends_persist_every_event(session_factory, log_store: LogStore):
    """Test a slow write cannot overwrite a newer buffer written meanwhile"""
    put_value = StateRepository.put_value
    writing = threading.Event()

    def slow_put_value(repo, key, value):
        if not writing.is_set():
            writing.set()
            time.sleep(0.3)
        return put_value(repo, key, value)

    with patch.object(StateRepository, "put_value", autospec=True, side_effect=slow_put_value):
        worker = threading.Thread(target=log_store.append, kwargs={"endpoint": "/a", "status": 200, "latency": 1})
        worker.start()
        assert writing.wait(timeout=5)
        log_store.append(endpoint="/b", status=200, latency=1)
        worker.join(timeout=5)

    stored = json.loads(stored_value(session_factory))
    assert [e.endpoint for e in log_store.logs] == ["/b", "/a"]
    assert [e["endpoint"] for e in stored] == ["/b", "/a"]


def test_load_initial_publishes_status_on_every_path(session_factory):
    """Test the status gauge is set even when nothing could be loaded"""
    store = LogStore(session_factory)

    with patch("bank_dashboard.infrastructure.storage.log_store.record_system_status") as mock_record:
        store.load_initial()
        with patch.object(StateRepository, "get_value", side_effect=OperationalError("SELECT", {}, Exception("locked"))):
            store.load_initial()

    assert mock_record.call_count == 2
    mock_record.assert_called_with(SystemStatus.OK)
