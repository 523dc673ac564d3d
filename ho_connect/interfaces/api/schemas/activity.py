"""Schemas for chat messages, tasks and issues."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ho_connect.domain.entities import GLOBAL_ROOM, IssueSeverity, TaskStatus


class ChatMessageCreate(BaseModel):
    room: str = Field(default=GLOBAL_ROOM, min_length=1)
    text: str = Field(..., min_length=1)


class ChatMessageRead(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: str
    room: str

    model_config = ConfigDict(from_attributes=True)


class CheckItemRead(BaseModel):
    id: str
    label: str
    is_done: bool

    model_config = ConfigDict(from_attributes=True)


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    department: str = Field(..., min_length=1)
    assignee_id: str = ""
    assignee_name: str = ""
    deadline: str = ""
    status: TaskStatus = TaskStatus.TODO
    sub_tasks: list[str] = Field(default_factory=list)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class SubTaskUpdate(BaseModel):
    is_done: bool


class TaskRead(BaseModel):
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
    sub_tasks: list[CheckItemRead]

    model_config = ConfigDict(from_attributes=True)


class IssueCreate(BaseModel):
    department: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    severity: IssueSeverity = IssueSeverity.NORMAL


class IssueCommentCreate(BaseModel):
    text: str = Field(..., min_length=1)


class IssueCommentRead(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    sender_avatar: str
    text: str
    timestamp: str

    model_config = ConfigDict(from_attributes=True)


class IssueRead(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    sender_avatar: str
    department: str
    text: str
    severity: IssueSeverity
    timestamp: str
    comments: list[IssueCommentRead]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ChatMessageCreate",
    "ChatMessageRead",
    "CheckItemRead",
    "IssueCommentCreate",
    "IssueCommentRead",
    "IssueCreate",
    "IssueRead",
    "SubTaskUpdate",
    "TaskCreate",
    "TaskRead",
    "TaskStatusUpdate",
]
