"""Domain entities exposed by the application."""

from .assistant import ProjectIdea, TaskDraft
from .chat_message import (
    DIRECT_ROOM_PREFIX,
    GLOBAL_ROOM,
    ChatMessage,
    direct_room_id,
    direct_room_members,
)
from .employee import ActivityStats, Employee, JobLevel
from .issue import Issue, IssueComment, IssueSeverity
from .notification import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_MENTION,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    NotificationRecord,
)
from .presence import PresenceSnapshot
from .task import CheckItem, Task, TaskStatus
from .toast import ToastEntry, ToastState

__all__ = [
    "ActivityStats",
    "ChatMessage",
    "CheckItem",
    "DIRECT_ROOM_PREFIX",
    "Employee",
    "GLOBAL_ROOM",
    "Issue",
    "IssueComment",
    "IssueSeverity",
    "JobLevel",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NOTIFICATION_TYPES",
    "NotificationRecord",
    "PresenceSnapshot",
    "ProjectIdea",
    "Task",
    "TaskDraft",
    "TaskStatus",
    "ToastEntry",
    "ToastState",
    "direct_room_id",
    "direct_room_members",
]
