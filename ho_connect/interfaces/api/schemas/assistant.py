"""Pydantic models for the assistant endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProjectIdeasRequest(BaseModel):
    challenge: str = Field(..., min_length=1, description="Business challenge to address")


class ProjectIdeaRead(BaseModel):
    title: str
    description: str
    objective: str
    key_steps: list[str]
    impact: str

    model_config = ConfigDict(from_attributes=True)


class TaskDraftRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Free-form work instruction")


class TaskDraftRead(BaseModel):
    title: str
    description: str
    department: str
    assignee_id: str
    assignee_name: str
    deadline: str
    suggested_sub_tasks: list[str]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ProjectIdeaRead",
    "ProjectIdeasRequest",
    "TaskDraftRead",
    "TaskDraftRequest",
]
