"""Utility helpers to push toast lifecycle events to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from ho_connect.domain.entities import NotificationRecord, ToastEntry
from ho_connect.infrastructure.serialization import notification_to_dict

from .manager import InstanceConnectionManager

logger = logging.getLogger(__name__)

TOAST_ADDED_EVENT = "toast.added"
TOAST_REMOVED_EVENT = "toast.removed"
SYNC_EVENT = "sync"


class ToastEventPublisher:
    """Serialize toast changes and schedule their delivery to one instance."""

    def __init__(self, manager: InstanceConnectionManager) -> None:
        self._manager = manager

    def toast_added(self, instance_id: str, entry: ToastEntry) -> None:
        self._schedule_send(
            instance_id, {"type": TOAST_ADDED_EVENT, "data": serialize_toast(entry)}
        )

    def toast_removed(self, instance_id: str, entry: ToastEntry) -> None:
        self._schedule_send(
            instance_id, {"type": TOAST_REMOVED_EVENT, "data": {"id": entry.id}}
        )

    def sync_changed(self, instance_id: str, *, key: str | None, syncing: bool) -> None:
        self._schedule_send(
            instance_id, {"type": SYNC_EVENT, "data": {"key": key, "syncing": syncing}}
        )

    def _schedule_send(self, instance_id: str, message: dict[str, Any]) -> None:
        if not self._manager.connection_count(instance_id):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._send_from_thread(instance_id, message)
        else:
            loop.create_task(self._manager.send_to_instance(instance_id, message))

    def _send_from_thread(self, instance_id: str, message: dict[str, Any]) -> None:
        if hasattr(from_thread, "start_soon"):  # pragma: no cover - older anyio
            from_thread.start_soon(self._manager.send_to_instance, instance_id, message)
            return
        try:
            from_thread.run(self._manager.send_to_instance, instance_id, message)
            return
        except RuntimeError:
            # not an anyio worker thread
            loop = self._manager.loop
        if loop is None or loop.is_closed():
            logger.warning(
                "No event loop to deliver %s to instance %s", message["type"], instance_id
            )
            return
        asyncio.run_coroutine_threadsafe(
            self._manager.send_to_instance(instance_id, message), loop
        )


def serialize_notification(notification: NotificationRecord) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return notification_to_dict(notification)


def serialize_toast(entry: ToastEntry) -> dict[str, Any]:
    payload = serialize_notification(entry.notification)
    payload["lifetime"] = entry.lifetime
    payload["expiresAt"] = entry.expires_at
    payload["state"] = entry.state.value
    return payload


__all__ = [
    "SYNC_EVENT",
    "TOAST_ADDED_EVENT",
    "TOAST_REMOVED_EVENT",
    "ToastEventPublisher",
    "serialize_notification",
    "serialize_toast",
]
