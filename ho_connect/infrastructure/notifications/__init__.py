"""Signal and realtime notification helpers for the infrastructure layer."""

from .bus import ChangeSignal, ChangeSignalBus, SignalHandler, signal_bus
from .manager import InstanceConnectionManager, instance_manager
from .publisher import (
    SYNC_EVENT,
    TOAST_ADDED_EVENT,
    TOAST_REMOVED_EVENT,
    ToastEventPublisher,
    serialize_notification,
    serialize_toast,
)

__all__ = [
    "ChangeSignal",
    "ChangeSignalBus",
    "SignalHandler",
    "signal_bus",
    "InstanceConnectionManager",
    "instance_manager",
    "SYNC_EVENT",
    "TOAST_ADDED_EVENT",
    "TOAST_REMOVED_EVENT",
    "ToastEventPublisher",
    "serialize_notification",
    "serialize_toast",
]
