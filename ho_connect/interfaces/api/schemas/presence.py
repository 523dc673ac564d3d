"""Presence summary schema."""

from pydantic import BaseModel

from .employee import EmployeeRead


class PresenceRead(BaseModel):
    online_count: int
    offline_count: int
    online_users: list[EmployeeRead]


__all__ = ["PresenceRead"]
