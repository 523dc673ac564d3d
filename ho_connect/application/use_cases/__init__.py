"""Application use cases grouped by concern."""

from .activity import (
    add_issue_comment,
    convert_issue_to_task,
    create_issue,
    send_chat_message,
    track_activity,
)
from .assistant import draft_task, generate_project_ideas
from .mentions import extract_mentions, resolve_mentions
from .presence import is_online, presence_stats
from .sessions import delete_employee, login, logout, register_employee, sign_up
from .tasks import add_task, update_sub_task, update_task_status

__all__ = [
    "add_issue_comment",
    "add_task",
    "convert_issue_to_task",
    "create_issue",
    "delete_employee",
    "draft_task",
    "extract_mentions",
    "generate_project_ideas",
    "is_online",
    "login",
    "logout",
    "presence_stats",
    "register_employee",
    "resolve_mentions",
    "send_chat_message",
    "sign_up",
    "track_activity",
    "update_sub_task",
    "update_task_status",
]
