"""Durable key-value store holding one serialized document per collection."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ho_connect.infrastructure.notifications.bus import ChangeSignalBus
from ho_connect.infrastructure.repositories import RecordRepository
from ho_connect.infrastructure.storage_keys import (
    EMPLOYEES_KEY,
    ISSUES_KEY,
    NOTIFICATIONS_KEY,
    TASKS_KEY,
    TRACKED_KEYS,
)

logger = logging.getLogger(__name__)


class RecordStoreError(RuntimeError):
    """Raised when the underlying database rejects a read or a write."""


class RecordStore:
    """Persist whole collections and announce every write on the bus.

    ``write`` always re-serializes the full value; there is no delta
    encoding and no version check, so concurrent writers follow
    last-writer-wins at the granularity of a collection.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        bus: ChangeSignalBus | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._bus = bus

    @property
    def bus(self) -> ChangeSignalBus | None:
        return self._bus

    def read_raw(self, key: str) -> str | None:
        """Return the serialized value stored under ``key``."""

        session = self._session_factory()
        try:
            return RecordRepository(session).get(key)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"Could not read key {key!r}") from exc
        finally:
            session.close()

    def read(self, key: str) -> Any | None:
        """Return the deserialized value under ``key`` or ``None`` when absent.

        A stored value that is not valid JSON is reported as absent.
        """

        raw = self.read_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored value for %s is not valid JSON; ignoring it", key)
            return None

    def write(self, key: str, value: Any, *, origin: str | None = None) -> str:
        """Serialize ``value`` and persist it under ``key``.

        Every subscriber of the bus except ``origin`` is signalled once the
        value is committed. Returns the serialized payload.
        """

        raw = json.dumps(value, ensure_ascii=False)
        session = self._session_factory()
        try:
            RecordRepository(session).put(key, raw)
        except SQLAlchemyError as exc:
            session.rollback()
            raise RecordStoreError(f"Could not write key {key!r}") from exc
        finally:
            session.close()

        if self._bus is not None:
            self._bus.publish(key, raw, origin=origin)
        return raw


__all__ = [
    "EMPLOYEES_KEY",
    "ISSUES_KEY",
    "NOTIFICATIONS_KEY",
    "RecordStore",
    "RecordStoreError",
    "TASKS_KEY",
    "TRACKED_KEYS",
]
