"""In-process change-signal bus shared by every open instance.

Writing a collection to the record store publishes the key and the new
serialized value here. Every subscriber except the writer receives it,
which mirrors how browsers fire ``storage`` events only in the other tabs.
Delivery is synchronous, so signals for one key reach a subscriber in the
order the writes happened. Nothing is replayed to late subscribers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeSignal:
    """Notice that ``key`` now holds ``value`` (serialized)."""

    key: str
    value: str | None
    origin: str | None = None


SignalHandler = Callable[[ChangeSignal], None]


class ChangeSignalBus:
    """Publish/subscribe channel where the topic is the record key."""

    def __init__(self) -> None:
        self._subscribers: dict[str, SignalHandler] = {}

    def subscribe(self, subscriber_id: str, handler: SignalHandler) -> None:
        """Register ``handler`` to receive signals raised by other subscribers."""

        self._subscribers[subscriber_id] = handler

    def unsubscribe(self, subscriber_id: str) -> None:
        self._subscribers.pop(subscriber_id, None)

    def is_subscribed(self, subscriber_id: str) -> bool:
        return subscriber_id in self._subscribers

    def publish(self, key: str, value: str | None, *, origin: str | None = None) -> int:
        """Deliver a signal to every subscriber other than ``origin``.

        Returns the number of subscribers the signal was handed to. A failing
        handler is logged and does not prevent delivery to the others.
        """

        signal = ChangeSignal(key=key, value=value, origin=origin)
        delivered = 0
        for subscriber_id, handler in list(self._subscribers.items()):
            if subscriber_id == origin:
                continue
            delivered += 1
            try:
                handler(signal)
            except Exception:
                logger.exception(
                    "Signal handler of %s failed for key %s", subscriber_id, key
                )
        return delivered


signal_bus = ChangeSignalBus()


__all__ = ["ChangeSignal", "ChangeSignalBus", "SignalHandler", "signal_bus"]
