"""Read/unread bookkeeping over the shared notification ledger."""

from __future__ import annotations

from dataclasses import replace

from ho_connect.application.state import AppState, persist_collection
from ho_connect.domain.entities import NotificationRecord
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.storage_keys import NOTIFICATIONS_KEY


def visible_notifications(state: AppState) -> list[NotificationRecord]:
    """Return the broadcast records plus the ones addressed to the current user."""

    user_id = state.current_user_id
    return [record for record in state.notifications if record.is_visible_to(user_id)]


def unread_count(state: AppState) -> int:
    return sum(1 for record in visible_notifications(state) if not record.is_read)


def mark_read(
    state: AppState, store: RecordStore, notification_id: str, *, origin: str | None
) -> NotificationRecord | None:
    """Flag one record as read and persist the ledger.

    Returns the updated record or ``None`` when the id is unknown or the
    record is addressed to someone else.
    """

    if not any(record.id == notification_id for record in visible_notifications(state)):
        return None

    updated: NotificationRecord | None = None
    records: list[NotificationRecord] = []
    for record in state.notifications:
        if record.id == notification_id and updated is None:
            record = replace(record, is_read=True)
            updated = record
        records.append(record)
    if updated is None:
        return None

    state.notifications = records
    persist_collection(store, state, NOTIFICATIONS_KEY, origin=origin)
    return updated


def mark_all_read(state: AppState, store: RecordStore, *, origin: str | None) -> int:
    """Flag every record of the shared ledger as read.

    The flag is not per reader: the ledger keeps a single ``is_read`` per
    record, so this also clears records addressed to other users.
    """

    changed = sum(1 for record in state.notifications if not record.is_read)
    state.notifications = [replace(record, is_read=True) for record in state.notifications]
    persist_collection(store, state, NOTIFICATIONS_KEY, origin=origin)
    return changed


def clear_all(state: AppState, store: RecordStore, *, origin: str | None) -> int:
    """Empty the ledger for everybody. Returns the number of removed records."""

    removed = len(state.notifications)
    state.notifications = []
    persist_collection(store, state, NOTIFICATIONS_KEY, origin=origin)
    return removed


__all__ = [
    "clear_all",
    "mark_all_read",
    "mark_read",
    "unread_count",
    "visible_notifications",
]
