"""Use cases for chat messages and issue reports.

Each of them bumps the actor's activity counters in the directory and
raises the notifications the mutation calls for.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import replace
from datetime import timedelta
from typing import Final

from ho_connect.application.state import AppState, persist_collection
from ho_connect.domain.entities import (
    GLOBAL_ROOM,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_MENTION,
    ChatMessage,
    Employee,
    Issue,
    IssueComment,
    IssueSeverity,
    Task,
    direct_room_members,
)
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY, ISSUES_KEY
from ho_connect.utils import format_iso_datetime, now_in_app_timezone

from .mentions import resolve_mentions
from .notifications import NotificationDispatcher
from .tasks import add_task

logger = logging.getLogger(__name__)

ACTIVITY_MESSAGE: Final[str] = "message"
ACTIVITY_ISSUE: Final[str] = "issue"
ACTIVITY_COMMENT: Final[str] = "comment"

_UNASSIGNED_NAME: Final[str] = "Awaiting assignment"


def _new_id() -> str:
    return secrets.token_hex(5)[:9]


def _require_user(state: AppState) -> Employee:
    if state.current_user is None:
        raise ValueError("No employee is logged in on this instance")
    return state.current_user


def room_label(room: str) -> str:
    """Return the human readable name of a chat room."""

    if room == GLOBAL_ROOM:
        return "All departments"
    return room.split("/")[-1]


def track_activity(
    state: AppState, store: RecordStore, activity: str, user_id: str, *, origin: str | None
) -> Employee | None:
    """Increment one activity counter of ``user_id`` and persist the directory."""

    employee = state.find_employee(user_id)
    if employee is None:
        logger.warning("Cannot track %s activity of unknown employee %s", activity, user_id)
        return None

    stats = employee.stats
    if activity == ACTIVITY_MESSAGE:
        stats = replace(stats, messages_sent=stats.messages_sent + 1)
    elif activity == ACTIVITY_ISSUE:
        stats = replace(stats, issues_reported=stats.issues_reported + 1)
    elif activity == ACTIVITY_COMMENT:
        stats = replace(stats, comments_made=stats.comments_made + 1)
    else:
        raise ValueError(f"Unknown activity type {activity!r}")

    updated = replace(employee, stats=stats)
    state.employees = [updated if emp.id == user_id else emp for emp in state.employees]
    if state.current_user_id == user_id:
        state.current_user = updated
    persist_collection(store, state, EMPLOYEES_KEY, origin=origin)
    return updated


def send_chat_message(
    state: AppState,
    store: RecordStore,
    dispatcher: NotificationDispatcher,
    *,
    room: str,
    text: str,
    origin: str | None,
) -> ChatMessage:
    """Post ``text`` in ``room`` as the logged-in employee.

    Private rooms notify the partner; group rooms notify every mentioned
    employee with a ``mention`` record.
    """

    sender = _require_user(state)
    if not text.strip():
        raise ValueError("The message is empty")
    room = room or GLOBAL_ROOM

    message = ChatMessage(
        id=_new_id(),
        sender_id=sender.id,
        sender_name=sender.name,
        text=text,
        timestamp=now_in_app_timezone().strftime("%H:%M"),
        room=room,
    )

    if message.is_direct:
        partner_id = next(
            (member for member in direct_room_members(room) if member != sender.id), None
        )
        partner = state.find_employee(partner_id)
        if partner is not None:
            dispatcher.notify(
                f"📩 New message from {sender.name}",
                f'Private message: "{text[:50]}..."',
                NOTIFICATION_TYPE_INFO,
                sender.department,
                partner.id,
            )
    else:
        for mentioned in resolve_mentions(text, state.employees, acting_user_id=sender.id):
            dispatcher.notify(
                f"🔔 Mentioned by {sender.name}",
                f'In {room_label(room)}: "{text[:50]}..."',
                NOTIFICATION_TYPE_MENTION,
                mentioned.department,
                mentioned.id,
            )

    state.messages = [*state.messages, message]
    track_activity(state, store, ACTIVITY_MESSAGE, sender.id, origin=origin)
    return message


def create_issue(
    state: AppState,
    store: RecordStore,
    *,
    department: str,
    text: str,
    severity: IssueSeverity = IssueSeverity.NORMAL,
    origin: str | None,
) -> Issue:
    """Report a problem to ``department``."""

    sender = _require_user(state)
    if not text.strip():
        raise ValueError("The issue text is empty")
    if not department.strip():
        raise ValueError("The department is required")

    issue = Issue(
        id=_new_id(),
        sender_id=sender.id,
        sender_name=sender.name,
        sender_avatar=sender.avatar,
        department=department.strip(),
        text=text,
        severity=severity,
        timestamp=format_iso_datetime(now_in_app_timezone()) or "",
        comments=[],
    )
    state.issues = [issue, *state.issues]
    persist_collection(store, state, ISSUES_KEY, origin=origin)
    track_activity(state, store, ACTIVITY_ISSUE, sender.id, origin=origin)
    return issue


def add_issue_comment(
    state: AppState,
    store: RecordStore,
    dispatcher: NotificationDispatcher,
    issue_id: str,
    *,
    text: str,
    origin: str | None,
) -> IssueComment:
    """Reply to an issue, notifying every employee mentioned in the reply."""

    sender = _require_user(state)
    if not text.strip():
        raise ValueError("The comment is empty")
    issue = state.find_issue(issue_id)
    if issue is None:
        raise ValueError("Issue not found")

    for mentioned in resolve_mentions(text, state.employees, acting_user_id=sender.id):
        dispatcher.notify(
            f"🔔 Mentioned by {sender.name}",
            f'{sender.name} commented on an issue: "{issue.text[:40]}..."',
            NOTIFICATION_TYPE_MENTION,
            mentioned.department,
            mentioned.id,
        )

    comment = IssueComment(
        id=_new_id(),
        sender_id=sender.id,
        sender_name=sender.name,
        sender_avatar=sender.avatar,
        text=text,
        timestamp=format_iso_datetime(now_in_app_timezone()) or "",
    )
    updated = replace(issue, comments=[*issue.comments, comment])
    state.issues = [updated if item.id == issue_id else item for item in state.issues]
    persist_collection(store, state, ISSUES_KEY, origin=origin)
    track_activity(state, store, ACTIVITY_COMMENT, sender.id, origin=origin)
    return comment


def convert_issue_to_task(
    state: AppState,
    store: RecordStore,
    dispatcher: NotificationDispatcher,
    issue_id: str,
    *,
    origin: str | None,
) -> Task:
    """Open a fix task for the issue's department.

    The first employee of that department in directory order is assigned;
    without one the task is left unassigned and its notification is a
    broadcast.
    """

    issue = state.find_issue(issue_id)
    if issue is None:
        raise ValueError("Issue not found")

    assignee = next(
        (emp for emp in state.employees if emp.department == issue.department), None
    )
    deadline = (now_in_app_timezone() + timedelta(days=1)).date().isoformat()
    return add_task(
        state,
        store,
        dispatcher,
        title=f"[Fix] {issue.text[:30]}...",
        description=f"Created from issue: {issue.text}",
        department=issue.department,
        assignee_id=assignee.id if assignee else "",
        assignee_name=assignee.name if assignee else _UNASSIGNED_NAME,
        deadline=deadline,
        origin=origin,
    )


__all__ = [
    "ACTIVITY_COMMENT",
    "ACTIVITY_ISSUE",
    "ACTIVITY_MESSAGE",
    "add_issue_comment",
    "convert_issue_to_task",
    "create_issue",
    "room_label",
    "send_chat_message",
    "track_activity",
]
