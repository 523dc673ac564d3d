"""Domain entity representing an employee of the directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class JobLevel(str, Enum):
    """Seniority levels used by the employee directory."""

    EXECUTIVE = "executive"
    MANAGER = "manager"
    SUPERVISOR = "supervisor"
    STAFF = "staff"


@dataclass
class ActivityStats:
    """Counters of the collaboration activity of one employee."""

    messages_sent: int = 0
    issues_reported: int = 0
    comments_made: int = 0


@dataclass
class Employee:
    """Core attributes describing a member of the organization."""

    id: str
    name: str
    department: str
    role: str = ""
    level: JobLevel = JobLevel.STAFF
    avatar: str = ""
    last_active: datetime | None = None
    stats: ActivityStats = field(default_factory=ActivityStats)


__all__ = ["ActivityStats", "Employee", "JobLevel"]
