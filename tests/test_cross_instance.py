"""Tests for notification delivery between instances sharing a store."""

from dataclasses import replace
from datetime import datetime, timezone

from ho_connect.application.use_cases import login, send_chat_message
from ho_connect.application.use_cases.notifications import unread_count
from ho_connect.domain.entities import NotificationRecord
from ho_connect.infrastructure.serialization import encode_collection
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY, NOTIFICATIONS_KEY


def _mention(notification_id, target, minute=0):
    return NotificationRecord(
        id=notification_id,
        title="🔔 Mentioned by alice",
        message="In All departments",
        type="mention",
        timestamp=datetime(2024, 1, 1, 9, minute, tzinfo=timezone.utc),
        department="Logistics",
        target_user_id=target,
    )


def _logged(open_instance, store, employee_id):
    instance = open_instance(f"instance-{employee_id}")
    login(instance.state, store, employee_id, origin=instance.id)
    return instance


def _publish_ledger(store, records):
    store.write(NOTIFICATIONS_KEY, encode_collection(NOTIFICATIONS_KEY, records), origin="writer")


def test_alice_mentions_bob_across_instances(store, scheduler, directory, open_instance):
    alice = _logged(open_instance, store, "u-alice")
    bob = _logged(open_instance, store, "u-bob")
    carol = _logged(open_instance, store, "u-carol")

    send_chat_message(
        alice.state,
        store,
        alice.dispatcher,
        room="GLOBAL",
        text="@bob check this",
        origin=alice.id,
    )

    ledger = alice.state.notifications
    assert len(ledger) == 1
    assert ledger[0].type == "mention"
    assert ledger[0].target_user_id == "u-bob"
    assert alice.toasts.visible_ids() == []

    toasts = bob.toasts.visible()
    assert len(toasts) == 1
    assert "alice" in toasts[0].notification.title
    assert unread_count(bob.state) == 1

    assert [record.id for record in carol.state.notifications] == [ledger[0].id]
    assert unread_count(carol.state) == 0
    assert carol.toasts.visible_ids() == []

    scheduler.advance(9.999)
    assert len(bob.toasts.visible()) == 1
    scheduler.advance(0.002)
    assert bob.toasts.visible() == []


def test_broadcast_signal_does_not_toast_remotely(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")
    broadcast = replace(_mention("n-1", None), type="success")

    _publish_ledger(store, [broadcast])

    assert [record.id for record in bob.state.notifications] == ["n-1"]
    assert bob.toasts.visible_ids() == []


def test_replayed_signal_toasts_once(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")
    records = [_mention("n-1", "u-bob")]

    _publish_ledger(store, records)
    _publish_ledger(store, records)

    assert bob.toasts.visible_ids() == ["n-1"]

    scheduler.advance(11)
    _publish_ledger(store, records)
    assert bob.toasts.visible_ids() == []


def test_only_newest_mention_is_toasted_per_signal(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")

    _publish_ledger(store, [_mention("n-2", "u-bob", 2), _mention("n-1", "u-bob", 1)])

    assert bob.toasts.visible_ids() == ["n-2"]
    assert bob.delivery.last_processed_id == "n-2"


def test_mentions_for_others_are_ignored(store, scheduler, directory, open_instance):
    carol = _logged(open_instance, store, "u-carol")

    _publish_ledger(store, [_mention("n-1", "u-bob")])

    assert carol.toasts.visible_ids() == []
    assert carol.delivery.last_processed_id is None


def test_logged_out_instance_only_mirrors_ledger(store, scheduler, directory, open_instance):
    anonymous = open_instance("anonymous")

    _publish_ledger(store, [_mention("n-1", "u-bob")])

    assert len(anonymous.state.notifications) == 1
    assert anonymous.toasts.visible_ids() == []


def test_writer_does_not_receive_its_own_signal(store, scheduler, directory, open_instance):
    alice = _logged(open_instance, store, "u-alice")

    alice.dispatcher.notify("hey", "msg", "mention", None, "u-alice")

    assert len(alice.toasts.visible()) == 1
    assert alice.syncing is False


def test_sync_indicator_resets_after_one_second(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")

    _publish_ledger(store, [])
    assert bob.syncing is True
    assert bob.last_signal_key == NOTIFICATIONS_KEY

    scheduler.advance(0.5)
    _publish_ledger(store, [])
    scheduler.advance(0.6)
    assert bob.syncing is True

    scheduler.advance(0.5)
    assert bob.syncing is False


def test_other_collections_are_replaced_wholesale(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")

    store.write(
        EMPLOYEES_KEY,
        encode_collection(EMPLOYEES_KEY, directory[:1]),
        origin="writer",
    )

    assert [employee.id for employee in bob.state.employees] == ["u-alice"]


def test_malformed_payload_empties_collection(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")
    _publish_ledger(store, [_mention("n-1", "u-bob")])

    store.bus.publish(NOTIFICATIONS_KEY, "{not json", origin="writer")

    assert bob.state.notifications == []


def test_closed_instance_stops_listening(store, scheduler, directory, open_instance):
    bob = _logged(open_instance, store, "u-bob")
    bob.close()

    _publish_ledger(store, [_mention("n-1", "u-bob")])

    assert bob.state.notifications == []
    assert not store.bus.is_subscribed(bob.id)


def test_untracked_key_only_sets_sync_indicator(
    store, scheduler, directory, open_instance, caplog
):
    bob = _logged(open_instance, store, "u-bob")
    _publish_ledger(store, [_mention("n-1", "u-bob")])
    employees = list(bob.state.employees)

    with caplog.at_level("ERROR"):
        store.write("ho_connect_user", {"id": "u-alice"}, origin="writer")

    assert not [record for record in caplog.records if record.levelname == "ERROR"]
    assert bob.syncing is True
    assert bob.last_signal_key == "ho_connect_user"
    assert bob.state.employees == employees
    assert [record.id for record in bob.state.notifications] == ["n-1"]
