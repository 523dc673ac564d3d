"""Keys of the collections kept in the shared record store."""

from typing import Final

EMPLOYEES_KEY: Final[str] = "ho_connect_employees"
TASKS_KEY: Final[str] = "ho_connect_tasks"
ISSUES_KEY: Final[str] = "ho_connect_issues"
NOTIFICATIONS_KEY: Final[str] = "ho_connect_notifications"

TRACKED_KEYS: Final[tuple[str, ...]] = (
    EMPLOYEES_KEY,
    TASKS_KEY,
    ISSUES_KEY,
    NOTIFICATIONS_KEY,
)

__all__ = [
    "EMPLOYEES_KEY",
    "ISSUES_KEY",
    "NOTIFICATIONS_KEY",
    "TASKS_KEY",
    "TRACKED_KEYS",
]
