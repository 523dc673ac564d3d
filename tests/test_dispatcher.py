"""Tests for the notification dispatcher."""

from conftest import make_employee

from ho_connect.application.state import AppState
from ho_connect.application.use_cases.notifications import (
    NotificationDispatcher,
    ToastManager,
)
from ho_connect.config import Settings
from ho_connect.infrastructure.record_store import RecordStoreError
from ho_connect.infrastructure.serialization import decode_payload
from ho_connect.infrastructure.storage_keys import NOTIFICATIONS_KEY

ALICE = make_employee("u-alice", "alice")


def _dispatcher(store, scheduler, *, user=ALICE, settings=None):
    state = AppState(current_user=user)
    toasts = ToastManager(scheduler)
    dispatcher = NotificationDispatcher(
        state, store, toasts, origin="instance-a", settings=settings or Settings()
    )
    return state, toasts, dispatcher


class FailingStore:
    bus = None

    def write(self, key, value, *, origin=None):
        raise RecordStoreError("database is locked")


def test_broadcast_is_stored_and_toasted_locally(store, scheduler):
    state, toasts, dispatcher = _dispatcher(store, scheduler)

    record = dispatcher.notify("Task completed!", "done", "success")

    assert record is not None
    assert record.target_user_id is None
    assert record.is_read is False
    assert state.notifications == [record]
    assert toasts.visible_ids() == [record.id]
    stored = decode_payload(NOTIFICATIONS_KEY, store.read_raw(NOTIFICATIONS_KEY))
    assert [item.id for item in stored] == [record.id]


def test_targeted_notification_for_someone_else_is_not_toasted(store, scheduler):
    state, toasts, dispatcher = _dispatcher(store, scheduler)

    record = dispatcher.notify("hi", "msg", "mention", "Logistics", "u-bob")

    assert state.notifications == [record]
    assert toasts.visible_ids() == []


def test_targeted_notification_for_current_user_is_toasted(store, scheduler):
    _, toasts, dispatcher = _dispatcher(store, scheduler)

    record = dispatcher.notify("hi", "msg", "info", None, "u-alice")

    assert toasts.visible_ids() == [record.id]


def test_empty_target_is_a_broadcast(store, scheduler):
    _, toasts, dispatcher = _dispatcher(store, scheduler)

    record = dispatcher.notify("hi", "msg", "info", "", "")

    assert record.target_user_id is None
    assert record.department is None
    assert toasts.visible_ids() == [record.id]


def test_local_toast_lifetimes_depend_on_type(store, scheduler):
    _, toasts, dispatcher = _dispatcher(store, scheduler)

    success = dispatcher.notify("ok", "msg", "success")
    mention = dispatcher.notify("hey", "msg", "mention", None, "u-alice")

    scheduler.advance(6.001)
    assert toasts.visible_ids() == [mention.id]
    assert success.id not in toasts.visible_ids()

    scheduler.advance(5.998)
    assert toasts.visible_ids() == [mention.id]
    scheduler.advance(0.002)
    assert toasts.visible_ids() == []


def test_ledger_is_capped_newest_first(store, scheduler):
    state, _, dispatcher = _dispatcher(store, scheduler)

    records = [dispatcher.notify(f"n{index}", "msg", "info") for index in range(101)]

    assert len(state.notifications) == 100
    assert state.notifications[0].id == records[-1].id
    assert state.notifications[-1].id == records[1].id
    assert records[0].id not in {record.id for record in state.notifications}
    stored = decode_payload(NOTIFICATIONS_KEY, store.read_raw(NOTIFICATIONS_KEY))
    assert [item.id for item in stored] == [item.id for item in state.notifications]


def test_missing_identity_still_appends(store, scheduler):
    state, toasts, dispatcher = _dispatcher(store, scheduler, user=None)

    record = dispatcher.notify("Task completed!", "done", "success")

    assert state.notifications == [record]
    assert toasts.visible_ids() == []


def test_storage_failure_is_a_no_op(scheduler, caplog):
    state, toasts, dispatcher = _dispatcher(FailingStore(), scheduler)

    with caplog.at_level("ERROR"):
        record = dispatcher.notify("hi", "msg", "info")

    assert record is None
    assert state.notifications == []
    assert toasts.visible_ids() == []
    assert "Could not persist" in caplog.text


def test_unknown_type_is_rejected(store, scheduler):
    state, _, dispatcher = _dispatcher(store, scheduler)

    assert dispatcher.notify("hi", "msg", "alert") is None
    assert state.notifications == []


def test_dispatch_signals_other_subscribers_only(store, bus, scheduler):
    received = []
    bus.subscribe("instance-a", lambda signal: received.append(("a", signal.key)))
    bus.subscribe("instance-b", lambda signal: received.append(("b", signal.key)))
    _, _, dispatcher = _dispatcher(store, scheduler)

    dispatcher.notify("hi", "msg", "info")

    assert received == [("b", NOTIFICATIONS_KEY)]
