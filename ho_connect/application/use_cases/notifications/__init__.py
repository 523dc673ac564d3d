"""Public helpers for emitting and receiving notifications."""

from .delivery import MentionSignalDelivery
from .dispatcher import NotificationDispatcher, local_toast_lifetime, new_notification_id
from .ledger import (
    clear_all,
    mark_all_read,
    mark_read,
    unread_count,
    visible_notifications,
)
from .toasts import TOAST_ADDED, TOAST_REMOVED, Scheduler, ToastManager

__all__ = [
    "MentionSignalDelivery",
    "NotificationDispatcher",
    "Scheduler",
    "TOAST_ADDED",
    "TOAST_REMOVED",
    "ToastManager",
    "clear_all",
    "local_toast_lifetime",
    "mark_all_read",
    "mark_read",
    "new_notification_id",
    "unread_count",
    "visible_notifications",
]
