"""Build notification records and fan them out from the acting instance."""

from __future__ import annotations

import logging
import uuid

from ho_connect.application.state import AppState, persist_collection
from ho_connect.config import Settings, get_settings
from ho_connect.domain.entities import (
    NOTIFICATION_TYPE_MENTION,
    NOTIFICATION_TYPES,
    NotificationRecord,
)
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.storage_keys import NOTIFICATIONS_KEY
from ho_connect.utils import now_in_app_timezone

from .toasts import ToastManager

logger = logging.getLogger(__name__)


def new_notification_id() -> str:
    return uuid.uuid4().hex[:12]


def local_toast_lifetime(notification_type: str, settings: Settings | None = None) -> float:
    """Seconds a toast raised by the dispatching instance stays visible."""

    settings = settings or get_settings()
    if notification_type == NOTIFICATION_TYPE_MENTION:
        return settings.mention_toast_lifetime_seconds
    return settings.toast_lifetime_seconds


class NotificationDispatcher:
    """Append notifications to the shared ledger and toast them locally.

    The ledger write reaches the other instances through the store's signal
    bus; this instance is never signalled for its own write, so it updates
    its ledger and toast queue directly.
    """

    def __init__(
        self,
        state: AppState,
        store: RecordStore,
        toasts: ToastManager,
        *,
        origin: str,
        settings: Settings | None = None,
    ) -> None:
        self._state = state
        self._store = store
        self._toasts = toasts
        self._origin = origin
        self._settings = settings or get_settings()

    def notify(
        self,
        title: str,
        message: str,
        notification_type: str,
        department: str | None = None,
        target_user_id: str | None = None,
    ) -> NotificationRecord | None:
        """Record a notification and decide whether to toast it here.

        Returns the stored record, or ``None`` when nothing could be
        recorded. An empty ``target_user_id`` addresses everybody.
        """

        if notification_type not in NOTIFICATION_TYPES:
            logger.warning("Ignoring notification with unknown type %r", notification_type)
            return None

        record = NotificationRecord(
            id=new_notification_id(),
            title=title,
            message=message,
            type=notification_type,
            timestamp=now_in_app_timezone(),
            department=department or None,
            target_user_id=target_user_id or None,
            is_read=False,
        )

        previous = self._state.notifications
        limit = self._settings.notification_ledger_limit
        self._state.notifications = [record, *previous][:limit]
        if not persist_collection(
            self._store, self._state, NOTIFICATIONS_KEY, origin=self._origin
        ):
            self._state.notifications = previous
            return None

        current_user_id = self._state.current_user_id
        if current_user_id is None:
            logger.debug("No identity on instance %s; skipping local toast", self._origin)
        elif record.is_visible_to(current_user_id):
            self._toasts.push(record, local_toast_lifetime(record.type, self._settings))
        return record


__all__ = ["NotificationDispatcher", "local_toast_lifetime", "new_notification_id"]
