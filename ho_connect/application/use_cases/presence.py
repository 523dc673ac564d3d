"""Online/offline status derived from the last activity timestamp."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from ho_connect.config import get_settings
from ho_connect.domain.entities import Employee, PresenceSnapshot
from ho_connect.utils import ensure_app_timezone, now_in_app_timezone


def is_online(
    employee: Employee,
    now: datetime | None = None,
    *,
    window: timedelta | None = None,
) -> bool:
    """Return ``True`` when ``employee`` was active within the presence window."""

    if employee.last_active is None:
        return False
    if window is None:
        window = timedelta(seconds=get_settings().presence_window_seconds)
    current = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return current - ensure_app_timezone(employee.last_active) < window


def presence_stats(
    employees: Sequence[Employee],
    now: datetime | None = None,
    *,
    window: timedelta | None = None,
) -> PresenceSnapshot:
    """Reduce the whole directory to online and offline counts."""

    current = now if now is not None else now_in_app_timezone()
    online = [employee for employee in employees if is_online(employee, current, window=window)]
    return PresenceSnapshot(
        online_count=len(online),
        offline_count=len(employees) - len(online),
        online_users=online,
    )


__all__ = ["is_online", "presence_stats"]
