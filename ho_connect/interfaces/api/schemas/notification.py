"""Pydantic models describing notification and toast payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationRead(BaseModel):
    """Representation of a ledger record delivered to the client."""

    id: str
    title: str
    message: str
    type: str
    timestamp: datetime
    department: str | None = None
    target_user_id: str | None = None
    is_read: bool = False

    model_config = ConfigDict(from_attributes=True)


class NotificationLedgerRead(BaseModel):
    items: list[NotificationRead]
    unread_count: int


class NotificationBulkResult(BaseModel):
    affected: int


class ToastRead(BaseModel):
    id: str
    notification: NotificationRead
    lifetime: float
    state: str


__all__ = [
    "NotificationBulkResult",
    "NotificationLedgerRead",
    "NotificationRead",
    "ToastRead",
]
