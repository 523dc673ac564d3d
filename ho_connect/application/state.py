"""Explicit per-instance application state and its persistence helper."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

from ho_connect.domain.entities import (
    ChatMessage,
    Employee,
    Issue,
    NotificationRecord,
    Task,
)
from ho_connect.infrastructure.record_store import RecordStore, RecordStoreError
from ho_connect.infrastructure.serialization import decode_payload, encode_collection
from ho_connect.infrastructure.storage_keys import (
    EMPLOYEES_KEY,
    ISSUES_KEY,
    NOTIFICATIONS_KEY,
    TASKS_KEY,
    TRACKED_KEYS,
)

logger = logging.getLogger(__name__)

BASE_DEPARTMENTS: Final[tuple[str, ...]] = (
    "Sales",
    "Logistics",
    "Marketing",
    "HR",
    "Warehouse",
)

_COLLECTION_ATTRIBUTES: Final[dict[str, str]] = {
    EMPLOYEES_KEY: "employees",
    TASKS_KEY: "tasks",
    ISSUES_KEY: "issues",
    NOTIFICATIONS_KEY: "notifications",
}


@dataclass
class AppState:
    """In-memory replica of the shared collections seen by one instance.

    Every list is replaced wholesale when a signal arrives; mutations made
    by this instance update the lists directly because the store never
    echoes a write back to its writer.
    """

    employees: list[Employee] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    notifications: list[NotificationRecord] = field(default_factory=list)
    messages: list[ChatMessage] = field(default_factory=list)
    current_user: Employee | None = None

    @property
    def current_user_id(self) -> str | None:
        return self.current_user.id if self.current_user else None

    def find_employee(self, employee_id: str | None) -> Employee | None:
        if not employee_id:
            return None
        return next((emp for emp in self.employees if emp.id == employee_id), None)

    def find_task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)

    def find_issue(self, issue_id: str) -> Issue | None:
        return next((issue for issue in self.issues if issue.id == issue_id), None)

    def collection(self, key: str) -> list[Any]:
        return getattr(self, _COLLECTION_ATTRIBUTES[key])

    def replace_collection(self, key: str, items: list[Any]) -> None:
        setattr(self, _COLLECTION_ATTRIBUTES[key], items)

    def available_departments(self) -> list[str]:
        """Return the base departments plus any found on the collections."""

        candidates = [
            *BASE_DEPARTMENTS,
            *(emp.department for emp in self.employees),
            *(task.department for task in self.tasks),
            *(issue.department for issue in self.issues),
        ]
        return list(dict.fromkeys(dept for dept in candidates if dept))


def persist_collection(
    store: RecordStore, state: AppState, key: str, *, origin: str | None
) -> bool:
    """Write the local copy of ``key`` to the store.

    Returns ``False`` when the store rejected the write; the failure is
    logged and never raised to the caller.
    """

    try:
        store.write(key, encode_collection(key, state.collection(key)), origin=origin)
    except RecordStoreError:
        logger.exception("Could not persist %s", key)
        return False
    return True


def load_collections(store: RecordStore, state: AppState) -> AppState:
    """Fill ``state`` with every tracked collection found in the store.

    A key that cannot be read is loaded as an empty collection.
    """

    for key in TRACKED_KEYS:
        try:
            raw = store.read_raw(key)
        except RecordStoreError:
            logger.exception("Could not load %s", key)
            raw = None
        state.replace_collection(key, decode_payload(key, raw))
    return state


__all__ = ["AppState", "BASE_DEPARTMENTS", "load_collections", "persist_collection"]
