"""Per-instance queue of self-expiring toasts."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from ho_connect.domain.entities import NotificationRecord, ToastEntry, ToastState

logger = logging.getLogger(__name__)

ToastListener = Callable[[str, ToastEntry], None]

TOAST_ADDED = "added"
TOAST_REMOVED = "removed"


class Scheduler(Protocol):
    """Fire-once timer primitive; an asyncio event loop satisfies it."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...

    def time(self) -> float:
        ...


class ToastManager:
    """Keep at most ``limit`` visible toasts, newest first.

    Each entry arms its own timer when it enters this queue and goes from
    ``VISIBLE`` to ``REMOVED`` exactly once, either when the timer fires,
    when it is dismissed, or when newer entries push it out. Removing an
    entry that is already gone is a no-op.
    """

    def __init__(self, scheduler: Scheduler, *, limit: int = 5) -> None:
        self._scheduler = scheduler
        self._limit = limit
        self._entries: list[ToastEntry] = []
        self._listeners: list[ToastListener] = []

    def add_listener(self, listener: ToastListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ToastListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def visible(self) -> list[ToastEntry]:
        return list(self._entries)

    def visible_ids(self) -> list[str]:
        return [entry.id for entry in self._entries]

    def get(self, notification_id: str) -> ToastEntry | None:
        return next((entry for entry in self._entries if entry.id == notification_id), None)

    def push(self, notification: NotificationRecord, lifetime: float) -> ToastEntry:
        """Show ``notification`` for ``lifetime`` seconds starting now."""

        if self.get(notification.id) is not None:
            self._remove(notification.id)

        entry = ToastEntry(
            notification=notification,
            lifetime=lifetime,
            added_at=self._scheduler.time(),
        )
        entry.handle = self._scheduler.call_later(lifetime, self._expire, notification.id)
        self._entries.insert(0, entry)
        self._emit(TOAST_ADDED, entry)

        while len(self._entries) > self._limit:
            self._retire(self._entries.pop())
        return entry

    def dismiss(self, notification_id: str) -> bool:
        """Remove a toast on user request. Returns ``False`` if it was not visible."""

        return self._remove(notification_id)

    def clear(self) -> None:
        for entry in list(self._entries):
            self._remove(entry.id)

    def _expire(self, notification_id: str) -> None:
        if self._remove(notification_id):
            logger.debug("Toast %s expired", notification_id)

    def _remove(self, notification_id: str) -> bool:
        entry = self.get(notification_id)
        if entry is None:
            return False
        self._entries.remove(entry)
        self._retire(entry)
        return True

    def _retire(self, entry: ToastEntry) -> None:
        if entry.state is ToastState.REMOVED:
            return
        entry.state = ToastState.REMOVED
        if entry.handle is not None:
            entry.handle.cancel()
            entry.handle = None
        self._emit(TOAST_REMOVED, entry)

    def _emit(self, event: str, entry: ToastEntry) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, entry)
            except Exception:
                logger.exception("Toast listener failed on %s for %s", event, entry.id)


__all__ = ["Scheduler", "TOAST_ADDED", "TOAST_REMOVED", "ToastListener", "ToastManager"]
