"""Use cases for the task board shared between departments."""

from __future__ import annotations

import secrets
from collections.abc import Iterable
from dataclasses import replace

from ho_connect.application.state import AppState, persist_collection
from ho_connect.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    CheckItem,
    Task,
    TaskStatus,
)
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.storage_keys import TASKS_KEY
from ho_connect.utils import now_in_app_timezone

from .notifications import NotificationDispatcher


def new_task_id() -> str:
    return f"t-{secrets.token_hex(5)[:9]}"


def add_task(
    state: AppState,
    store: RecordStore,
    dispatcher: NotificationDispatcher,
    *,
    title: str,
    description: str,
    department: str,
    assignee_id: str,
    assignee_name: str,
    deadline: str,
    status: TaskStatus = TaskStatus.TODO,
    sub_task_labels: Iterable[str] = (),
    origin: str | None,
) -> Task:
    """Create a task on the board and notify its assignee.

    An empty ``assignee_id`` makes the notification a broadcast.
    """

    if not title.strip():
        raise ValueError("The task title is required")

    creator = state.current_user
    task = Task(
        id=new_task_id(),
        title=title.strip(),
        description=description,
        status=status,
        department=department,
        creator_id=creator.id if creator else "",
        creator_name=creator.name if creator else "",
        creator_department=creator.department if creator else "",
        assignee_id=assignee_id,
        assignee_name=assignee_name,
        created_at=now_in_app_timezone(),
        deadline=deadline,
        sub_tasks=[
            CheckItem(id=secrets.token_hex(5)[:9], label=label)
            for label in sub_task_labels
            if label.strip()
        ],
    )
    state.tasks = [task, *state.tasks]
    persist_collection(store, state, TASKS_KEY, origin=origin)

    dispatcher.notify(
        "New task assigned",
        f'Task "{task.title}" sent to {task.assignee_name}',
        NOTIFICATION_TYPE_INFO,
        task.department,
        task.assignee_id,
    )
    return task


def update_task_status(
    state: AppState,
    store: RecordStore,
    dispatcher: NotificationDispatcher,
    task_id: str,
    status: TaskStatus,
    *,
    origin: str | None,
) -> Task:
    """Move a task to another column; completing it notifies everybody."""

    task = state.find_task(task_id)
    if task is None:
        raise ValueError("Task not found")

    updated = replace(task, status=status)
    state.tasks = [updated if item.id == task_id else item for item in state.tasks]
    persist_collection(store, state, TASKS_KEY, origin=origin)

    if status is TaskStatus.COMPLETED:
        dispatcher.notify(
            "Task completed!",
            f'Task "{updated.title}" was marked as completed',
            NOTIFICATION_TYPE_SUCCESS,
        )
    return updated


def update_sub_task(
    state: AppState,
    store: RecordStore,
    task_id: str,
    sub_task_id: str,
    is_done: bool,
    *,
    origin: str | None,
) -> Task:
    task = state.find_task(task_id)
    if task is None:
        raise ValueError("Task not found")
    if not any(item.id == sub_task_id for item in task.sub_tasks):
        raise ValueError("Sub task not found")

    updated = replace(
        task,
        sub_tasks=[
            replace(item, is_done=is_done) if item.id == sub_task_id else item
            for item in task.sub_tasks
        ],
    )
    state.tasks = [updated if item.id == task_id else item for item in state.tasks]
    persist_collection(store, state, TASKS_KEY, origin=origin)
    return updated


__all__ = ["add_task", "new_task_id", "update_sub_task", "update_task_status"]
