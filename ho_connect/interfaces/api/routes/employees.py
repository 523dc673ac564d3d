"""Routes over the shared employee directory."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ho_connect.application.instance import InstanceRegistry
from ho_connect.application.state import AppState
from ho_connect.application.use_cases import (
    delete_employee as delete_employee_uc,
    sign_up as sign_up_uc,
)
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.interfaces.api.dependencies import (
    get_directory_state,
    get_record_store,
    get_registry,
)
from ho_connect.interfaces.api.routes_helpers import employee_to_schema, session_to_schema
from ho_connect.interfaces.api.schemas import EmployeeCreate, EmployeeRead, SessionRead
from ho_connect.utils import now_in_app_timezone

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/", response_model=list[EmployeeRead])
async def list_employees(state: AppState = Depends(get_directory_state)) -> list[EmployeeRead]:
    now = now_in_app_timezone()
    return [employee_to_schema(employee, now) for employee in state.employees]


@router.post("/", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: EmployeeCreate,
    registry: InstanceRegistry = Depends(get_registry),
) -> SessionRead:
    """Register an employee and open a session logged in as them."""

    instance = registry.open(asyncio.get_running_loop())
    try:
        sign_up_uc(
            instance.state,
            registry.store,
            name=payload.name,
            department=payload.department,
            role=payload.role,
            level=payload.level,
            avatar=payload.avatar,
            origin=instance.id,
        )
    except ValueError as exc:
        registry.close(instance.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return session_to_schema(instance)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    state: AppState = Depends(get_directory_state),
    store: RecordStore = Depends(get_record_store),
) -> Response:
    if not delete_employee_uc(state, store, employee_id, origin=None):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
