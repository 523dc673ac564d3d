"""Employee directory schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ho_connect.domain.entities import JobLevel


class ActivityStatsRead(BaseModel):
    messages_sent: int
    issues_reported: int
    comments_made: int

    model_config = ConfigDict(from_attributes=True)


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    department: str = Field(..., min_length=1, max_length=80)
    role: str = Field(default="", max_length=80)
    level: JobLevel = JobLevel.STAFF
    avatar: str | None = None

    model_config = ConfigDict(extra="forbid")


class EmployeeRead(BaseModel):
    id: str
    name: str
    department: str
    role: str
    level: JobLevel
    avatar: str
    last_active: datetime | None
    stats: ActivityStatsRead
    is_online: bool = False

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ActivityStatsRead", "EmployeeCreate", "EmployeeRead"]
