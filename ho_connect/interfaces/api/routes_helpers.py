"""Helpers shared by the API routers to build response models."""

from __future__ import annotations

from ho_connect.application.instance import ClientInstance
from ho_connect.application.use_cases import is_online
from ho_connect.domain.entities import Employee, ToastEntry
from ho_connect.interfaces.api.schemas import (
    EmployeeRead,
    NotificationRead,
    SessionRead,
    ToastRead,
)
from ho_connect.utils import now_in_app_timezone


def employee_to_schema(employee: Employee, now=None) -> EmployeeRead:
    read = EmployeeRead.model_validate(employee)
    read.is_online = is_online(employee, now or now_in_app_timezone())
    return read


def toast_to_schema(entry: ToastEntry) -> ToastRead:
    return ToastRead(
        id=entry.id,
        notification=NotificationRead.model_validate(entry.notification),
        lifetime=entry.lifetime,
        state=entry.state.value,
    )


def session_to_schema(instance: ClientInstance) -> SessionRead:
    user = instance.state.current_user
    return SessionRead(
        id=instance.id,
        user=employee_to_schema(user) if user else None,
        syncing=instance.syncing,
        departments=instance.state.available_departments(),
    )


__all__ = ["employee_to_schema", "session_to_schema", "toast_to_schema"]
