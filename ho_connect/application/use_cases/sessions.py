"""Use cases for logging employees in and out of an instance."""

from __future__ import annotations

import logging
import secrets
from dataclasses import replace

from ho_connect.application.state import AppState, persist_collection
from ho_connect.domain.entities import ActivityStats, Employee, JobLevel
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY
from ho_connect.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def new_employee_id() -> str:
    return f"u-{secrets.token_hex(5)[:9]}"


def default_avatar(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/200/200"


def login(
    state: AppState, store: RecordStore, employee_id: str, *, origin: str | None
) -> Employee:
    """Adopt ``employee_id`` as the identity of this instance.

    The employee's ``last_active`` is stamped with the current time and the
    directory is written back so other instances see the employee online.
    """

    employee = state.find_employee(employee_id)
    if employee is None:
        raise ValueError("Employee not found")

    updated = replace(employee, last_active=now_in_app_timezone())
    state.employees = [updated if emp.id == employee_id else emp for emp in state.employees]
    state.current_user = updated
    persist_collection(store, state, EMPLOYEES_KEY, origin=origin)
    logger.info("Employee %s logged in on instance %s", employee_id, origin)
    return updated


def _new_employee(
    name: str, department: str, role: str, level: JobLevel, avatar: str | None
) -> Employee:
    name = name.strip()
    department = department.strip()
    if not name:
        raise ValueError("The employee name is required")
    if not department:
        raise ValueError("The department is required")

    employee_id = new_employee_id()
    return Employee(
        id=employee_id,
        name=name,
        department=department,
        role=role.strip(),
        level=level,
        avatar=avatar or default_avatar(employee_id),
        stats=ActivityStats(),
    )


def register_employee(
    state: AppState,
    store: RecordStore,
    *,
    name: str,
    department: str,
    role: str = "",
    level: JobLevel = JobLevel.STAFF,
    avatar: str | None = None,
    origin: str | None,
) -> Employee:
    """Append a new employee to the directory without logging it in.

    The employee starts offline: ``last_active`` stays empty until its first
    login.
    """

    employee = _new_employee(name, department, role, level, avatar)
    state.employees = [*state.employees, employee]
    persist_collection(store, state, EMPLOYEES_KEY, origin=origin)
    return employee


def sign_up(
    state: AppState,
    store: RecordStore,
    *,
    name: str,
    department: str,
    role: str = "",
    level: JobLevel = JobLevel.STAFF,
    avatar: str | None = None,
    origin: str | None,
) -> Employee:
    """Register a new employee and log it in on this instance."""

    employee = _new_employee(name, department, role, level, avatar)
    state.employees = [*state.employees, employee]
    return login(state, store, employee.id, origin=origin)


def logout(state: AppState) -> Employee | None:
    """Forget the identity of this instance; the directory is left untouched."""

    previous = state.current_user
    state.current_user = None
    return previous


def delete_employee(
    state: AppState, store: RecordStore, employee_id: str, *, origin: str | None
) -> bool:
    """Remove an employee from the directory.

    Deleting the employee logged in on this instance also logs it out.
    """

    remaining = [emp for emp in state.employees if emp.id != employee_id]
    if len(remaining) == len(state.employees):
        return False

    state.employees = remaining
    persist_collection(store, state, EMPLOYEES_KEY, origin=origin)
    if state.current_user_id == employee_id:
        logout(state)
    return True


__all__ = [
    "default_avatar",
    "delete_employee",
    "login",
    "logout",
    "new_employee_id",
    "register_employee",
    "sign_up",
]
