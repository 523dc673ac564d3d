"""Domain entities describing tasks handed between departments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    """Kanban column of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class CheckItem:
    """Sub task checklist entry."""

    id: str
    label: str
    is_done: bool = False


@dataclass
class Task:
    """Work item assigned to an employee of a department."""

    id: str
    title: str
    description: str
    status: TaskStatus
    department: str
    creator_id: str
    creator_name: str
    creator_department: str
    assignee_id: str
    assignee_name: str
    created_at: datetime | None
    deadline: str
    sub_tasks: list[CheckItem] = field(default_factory=list)


__all__ = ["CheckItem", "Task", "TaskStatus"]
