"""Domain entity describing a transient on-screen alert."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .notification import NotificationRecord


class ToastState(str, Enum):
    """Lifecycle of a toast: it is shown once and removed once."""

    VISIBLE = "visible"
    REMOVED = "removed"


@dataclass
class ToastEntry:
    """View of a :class:`NotificationRecord` with a bounded lifetime."""

    notification: NotificationRecord
    lifetime: float
    added_at: float
    state: ToastState = ToastState.VISIBLE
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def id(self) -> str:
        return self.notification.id

    @property
    def expires_at(self) -> float:
        return self.added_at + self.lifetime


__all__ = ["ToastEntry", "ToastState"]
