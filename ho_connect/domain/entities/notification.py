"""Domain entity representing a notification of the shared ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

NOTIFICATION_TYPE_INFO: Final[str] = "info"
NOTIFICATION_TYPE_SUCCESS: Final[str] = "success"
NOTIFICATION_TYPE_WARNING: Final[str] = "warning"
NOTIFICATION_TYPE_MENTION: Final[str] = "mention"

NOTIFICATION_TYPES: Final[frozenset[str]] = frozenset(
    {
        NOTIFICATION_TYPE_INFO,
        NOTIFICATION_TYPE_SUCCESS,
        NOTIFICATION_TYPE_WARNING,
        NOTIFICATION_TYPE_MENTION,
    }
)


@dataclass(frozen=True)
class NotificationRecord:
    """Immutable notification entry.

    Only ``is_read`` changes after creation, and it does so by replacing the
    record with ``dataclasses.replace``. A missing ``target_user_id`` means
    the record is addressed to everybody.
    """

    id: str
    title: str
    message: str
    type: str
    timestamp: datetime
    department: str | None = None
    target_user_id: str | None = None
    is_read: bool = False

    @property
    def is_broadcast(self) -> bool:
        """Return ``True`` when the notification has no specific recipient."""

        return not self.target_user_id

    @property
    def is_mention(self) -> bool:
        return self.type == NOTIFICATION_TYPE_MENTION

    def is_visible_to(self, user_id: str | None) -> bool:
        """Return ``True`` when ``user_id`` should see this record in the ledger."""

        return self.is_broadcast or (
            user_id is not None and self.target_user_id == user_id
        )


__all__ = [
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPES",
    "NotificationRecord",
]
