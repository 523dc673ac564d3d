"""Routes opening and closing client instances."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ho_connect.application.instance import ClientInstance, InstanceRegistry
from ho_connect.application.use_cases import login as login_uc, logout as logout_uc
from ho_connect.interfaces.api.dependencies import get_instance, get_registry
from ho_connect.interfaces.api.routes_helpers import session_to_schema
from ho_connect.interfaces.api.schemas import SessionCreate, SessionRead

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def open_session(
    payload: SessionCreate,
    registry: InstanceRegistry = Depends(get_registry),
) -> SessionRead:
    """Open a new instance and log ``employee_id`` into it."""

    instance = registry.open(asyncio.get_running_loop())
    try:
        login_uc(instance.state, registry.store, payload.employee_id, origin=instance.id)
    except ValueError as exc:
        registry.close(instance.id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return session_to_schema(instance)


@router.get("/{session_id}", response_model=SessionRead)
async def read_session(instance: ClientInstance = Depends(get_instance)) -> SessionRead:
    return session_to_schema(instance)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    instance: ClientInstance = Depends(get_instance),
    registry: InstanceRegistry = Depends(get_registry),
) -> Response:
    """Log the employee out and discard the instance."""

    user = logout_uc(instance.state)
    registry.close(instance.id)
    logger.info("Session %s closed for %s", instance.id, user.id if user else None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
