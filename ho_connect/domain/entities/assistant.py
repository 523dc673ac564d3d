"""Shapes returned by the content generator."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ProjectIdea:
    """Cross-department project suggestion."""

    title: str
    description: str
    objective: str
    key_steps: list[str] = field(default_factory=list)
    impact: str = ""


@dataclass
class TaskDraft:
    """Structured task proposal parsed from a free-form prompt."""

    title: str
    description: str
    department: str
    assignee_id: str
    assignee_name: str
    deadline: str
    suggested_sub_tasks: list[str] = field(default_factory=list)


__all__ = ["ProjectIdea", "TaskDraft"]
