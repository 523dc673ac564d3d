"""Schemas describing client instances (sessions)."""

from pydantic import BaseModel, Field

from .employee import EmployeeRead


class SessionCreate(BaseModel):
    """Log an existing employee into a new instance."""

    employee_id: str = Field(..., min_length=1)


class SessionRead(BaseModel):
    id: str
    user: EmployeeRead | None
    syncing: bool = False
    departments: list[str] = Field(default_factory=list)


__all__ = ["SessionCreate", "SessionRead"]
