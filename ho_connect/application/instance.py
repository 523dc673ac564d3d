"""One client instance: its state replica, toast queue and bus subscription."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from ho_connect.application.state import AppState, load_collections
from ho_connect.application.use_cases.notifications import (
    TOAST_ADDED,
    MentionSignalDelivery,
    NotificationDispatcher,
    Scheduler,
    ToastManager,
)
from ho_connect.config import Settings, get_settings
from ho_connect.domain.entities import ToastEntry
from ho_connect.infrastructure.notifications import ChangeSignal, ToastEventPublisher
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.serialization import decode_payload
from ho_connect.infrastructure.storage_keys import NOTIFICATIONS_KEY, TRACKED_KEYS

logger = logging.getLogger(__name__)


class ClientInstance:
    """Wire an :class:`AppState` to the shared store and the signal bus.

    An instance plays the part of one open client: it loads every tracked
    collection on start, replaces them when another instance writes, and
    owns the toasts shown to its logged-in employee.
    """

    def __init__(
        self,
        store: RecordStore,
        scheduler: Scheduler,
        *,
        instance_id: str | None = None,
        settings: Settings | None = None,
        publisher: ToastEventPublisher | None = None,
    ) -> None:
        self.id = instance_id or uuid.uuid4().hex
        self.store = store
        self.settings = settings or get_settings()
        self.state = AppState()
        self.toasts = ToastManager(scheduler, limit=self.settings.toast_limit)
        self.dispatcher = NotificationDispatcher(
            self.state, store, self.toasts, origin=self.id, settings=self.settings
        )
        self.delivery = MentionSignalDelivery(self.state, self.toasts, settings=self.settings)
        self.syncing = False
        self.last_signal_key: str | None = None
        self._scheduler = scheduler
        self._sync_handle: Any = None
        self._publisher = publisher
        self._started = False
        if publisher is not None:
            self.toasts.add_listener(self._publish_toast)

    def start(self) -> ClientInstance:
        """Load the tracked collections and start listening for signals."""

        if self._started:
            return self
        load_collections(self.store, self.state)
        bus = self.store.bus
        if bus is not None:
            bus.subscribe(self.id, self._on_signal)
        self._started = True
        return self

    def close(self) -> None:
        bus = self.store.bus
        if bus is not None:
            bus.unsubscribe(self.id)
        if self._sync_handle is not None:
            self._sync_handle.cancel()
            self._sync_handle = None
        self.syncing = False
        self.toasts.clear()
        if self._publisher is not None:
            self.toasts.remove_listener(self._publish_toast)
        self._started = False

    def _on_signal(self, signal: ChangeSignal) -> None:
        self._mark_syncing(signal.key)
        if signal.key not in TRACKED_KEYS:
            return
        records = decode_payload(signal.key, signal.value)
        if signal.key == NOTIFICATIONS_KEY:
            self.delivery.receive(records)
        else:
            self.state.replace_collection(signal.key, records)

    def _mark_syncing(self, key: str) -> None:
        self.syncing = True
        self.last_signal_key = key
        if self._sync_handle is not None:
            self._sync_handle.cancel()
        self._sync_handle = self._scheduler.call_later(
            self.settings.sync_indicator_seconds, self._reset_syncing
        )
        if self._publisher is not None:
            self._publisher.sync_changed(self.id, key=key, syncing=True)

    def _reset_syncing(self) -> None:
        self._sync_handle = None
        self.syncing = False
        if self._publisher is not None:
            self._publisher.sync_changed(self.id, key=self.last_signal_key, syncing=False)

    def _publish_toast(self, event: str, entry: ToastEntry) -> None:
        if self._publisher is None:
            return
        if event == TOAST_ADDED:
            self._publisher.toast_added(self.id, entry)
        else:
            self._publisher.toast_removed(self.id, entry)


class InstanceRegistry:
    """Keep the open instances of one process addressable by id."""

    def __init__(
        self,
        store: RecordStore,
        *,
        settings: Settings | None = None,
        publisher: ToastEventPublisher | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._publisher = publisher
        self._instances: dict[str, ClientInstance] = {}

    @property
    def store(self) -> RecordStore:
        return self._store

    def open(self, scheduler: Scheduler, *, instance_id: str | None = None) -> ClientInstance:
        instance = ClientInstance(
            self._store,
            scheduler,
            instance_id=instance_id,
            settings=self._settings,
            publisher=self._publisher,
        )
        if instance.id in self._instances:
            raise ValueError(f"Instance {instance.id} is already open")
        self._instances[instance.id] = instance.start()
        logger.info("Opened instance %s", instance.id)
        return instance

    def get(self, instance_id: str) -> ClientInstance | None:
        return self._instances.get(instance_id)

    def close(self, instance_id: str) -> bool:
        instance = self._instances.pop(instance_id, None)
        if instance is None:
            return False
        instance.close()
        logger.info("Closed instance %s", instance_id)
        return True

    def close_all(self) -> None:
        for instance_id in list(self._instances):
            self.close(instance_id)

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self):
        return iter(list(self._instances.values()))


__all__ = ["ClientInstance", "InstanceRegistry"]
