"""Endpoints and websocket handler for the notification ledger and toasts."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, WebSocket, WebSocketDisconnect, status

from ho_connect.application.instance import ClientInstance
from ho_connect.application.use_cases.notifications import (
    clear_all,
    mark_all_read,
    mark_read,
    unread_count,
    visible_notifications,
)
from ho_connect.infrastructure.notifications import serialize_toast
from ho_connect.interfaces.api.dependencies import get_instance
from ho_connect.interfaces.api.routes_helpers import toast_to_schema
from ho_connect.interfaces.api.schemas import (
    NotificationBulkResult,
    NotificationLedgerRead,
    NotificationRead,
    ToastRead,
)

router = APIRouter(prefix="/sessions/{session_id}", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/notifications", response_model=NotificationLedgerRead)
async def list_notifications(
    instance: ClientInstance = Depends(get_instance),
) -> NotificationLedgerRead:
    """Return the ledger as seen by the employee of the session."""

    return NotificationLedgerRead(
        items=[
            NotificationRead.model_validate(record)
            for record in visible_notifications(instance.state)
        ],
        unread_count=unread_count(instance.state),
    )


@router.post("/notifications/read-all", response_model=NotificationBulkResult)
async def read_all_notifications(
    instance: ClientInstance = Depends(get_instance),
) -> NotificationBulkResult:
    affected = mark_all_read(instance.state, instance.store, origin=instance.id)
    return NotificationBulkResult(affected=affected)


@router.post("/notifications/{notification_id}/read", response_model=NotificationRead)
async def read_notification(
    notification_id: str,
    instance: ClientInstance = Depends(get_instance),
) -> NotificationRead:
    record = mark_read(instance.state, instance.store, notification_id, origin=instance.id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return NotificationRead.model_validate(record)


@router.delete("/notifications", response_model=NotificationBulkResult)
async def clear_notifications(
    instance: ClientInstance = Depends(get_instance),
) -> NotificationBulkResult:
    removed = clear_all(instance.state, instance.store, origin=instance.id)
    return NotificationBulkResult(affected=removed)


@router.get("/toasts", response_model=list[ToastRead])
async def list_toasts(instance: ClientInstance = Depends(get_instance)) -> list[ToastRead]:
    return [toast_to_schema(entry) for entry in instance.toasts.visible()]


@router.delete("/toasts/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_toast(
    notification_id: str,
    instance: ClientInstance = Depends(get_instance),
) -> Response:
    if not instance.toasts.dismiss(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Toast not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def toasts_websocket(websocket: WebSocket, session_id: str) -> None:
    """Websocket endpoint streaming toast and sync events of one session."""

    registry = websocket.app.state.registry
    manager = websocket.app.state.connection_manager
    instance = registry.get(session_id)
    if instance is None:
        await websocket.close(code=1008)
        return

    await manager.connect(instance.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_toast(entry) for entry in instance.toasts.visible()]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "dismiss":
                notification_id = message.get("id")
                if isinstance(notification_id, str):
                    instance.toasts.dismiss(notification_id)
                continue
    except WebSocketDisconnect:
        manager.disconnect(instance.id, websocket)
    except Exception:  # pragma: no cover - unexpected socket error
        manager.disconnect(instance.id, websocket)
        raise
