import pytest

from src.routecalc.services.calculator.errors import SessionNotFoundError
from src.routecalc.services.calculator.store import SessionStore


def test_sessions_are_isolated():
    store = SessionStore(max_sessions=10)
    first_id, first = store.create()
    second_id, second = store.create()

    first.add_stop("K48.11")

    assert first_id != second_id
    assert store.get(first_id).route == ["K48.11"]
    assert store.get(second_id).route == []
    assert second is not first


def test_unknown_session_raises():
    store = SessionStore(max_sessions=10)

    with pytest.raises(SessionNotFoundError):
        store.get("missing")
    with pytest.raises(SessionNotFoundError):
        store.discard("missing")


def test_discard_removes_session():
    store = SessionStore(max_sessions=10)
    session_id, _ = store.create()

    store.discard(session_id)

    assert session_id not in store
    assert len(store) == 0


def test_full_store_evicts_least_recently_used():
    store = SessionStore(max_sessions=2)
    oldest_id, _ = store.create()
    newer_id, _ = store.create()

    store.get(oldest_id)
    third_id, _ = store.create()

    assert len(store) == 2
    assert oldest_id in store
    assert third_id in store
    assert newer_id not in store


def test_process_store_is_shared():
    from src.routecalc.services.calculator.store import get_session_store

    assert get_session_store() is get_session_store()
