"""Conversion between domain entities and the persisted JSON documents.

Documents keep the field names of the shared storage layout (``lastActive``,
``targetUserId``, ``isRead`` ...) so every instance reads what the others
write regardless of which one produced it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ho_connect.domain.entities import (
    ActivityStats,
    CheckItem,
    Employee,
    Issue,
    IssueComment,
    IssueSeverity,
    JobLevel,
    NotificationRecord,
    NOTIFICATION_TYPES,
    Task,
    TaskStatus,
)
from ho_connect.infrastructure.storage_keys import (
    EMPLOYEES_KEY,
    ISSUES_KEY,
    NOTIFICATIONS_KEY,
    TASKS_KEY,
)
from ho_connect.utils import format_iso_datetime, parse_iso_datetime

logger = logging.getLogger(__name__)


class MalformedDocumentError(ValueError):
    """Raised when a stored document cannot be mapped to an entity."""


def parse_collection(raw: str | None, *, key: str = "") -> list[Any]:
    """Decode a serialized collection, falling back to an empty list.

    Signal payloads and stored values are trusted only as far as being JSON
    arrays; anything else is logged and treated as an empty collection.
    """

    if raw is None or raw == "":
        return []
    try:
        value = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        logger.warning("Payload for %s is not valid JSON; using an empty collection", key)
        return []
    if not isinstance(value, list):
        logger.warning("Payload for %s is not a JSON array; using an empty collection", key)
        return []
    return value


def _require_str(document: Mapping[str, Any], field: str) -> str:
    value = document.get(field)
    if not isinstance(value, str):
        raise MalformedDocumentError(f"'{field}' must be a string")
    return value


def _optional_str(document: Mapping[str, Any], field: str) -> str | None:
    value = document.get(field)
    if value is None:
        return None
    return str(value)


def _int_or_zero(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _enum_or_default(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


# ── Employees ────────────────────────────────────────────────


def employee_to_dict(employee: Employee) -> dict[str, Any]:
    return {
        "id": employee.id,
        "name": employee.name,
        "role": employee.role,
        "level": employee.level.value,
        "department": employee.department,
        "avatar": employee.avatar,
        "lastActive": format_iso_datetime(employee.last_active),
        "stats": {
            "messagesSent": employee.stats.messages_sent,
            "issuesReported": employee.stats.issues_reported,
            "commentsMade": employee.stats.comments_made,
        },
    }


def employee_from_dict(document: Mapping[str, Any]) -> Employee:
    stats = document.get("stats") or {}
    if not isinstance(stats, Mapping):
        stats = {}
    return Employee(
        id=_require_str(document, "id"),
        name=_require_str(document, "name"),
        department=str(document.get("department") or ""),
        role=str(document.get("role") or ""),
        level=_enum_or_default(JobLevel, document.get("level"), JobLevel.STAFF),
        avatar=str(document.get("avatar") or ""),
        last_active=parse_iso_datetime(document.get("lastActive")),
        stats=ActivityStats(
            messages_sent=_int_or_zero(stats.get("messagesSent")),
            issues_reported=_int_or_zero(stats.get("issuesReported")),
            comments_made=_int_or_zero(stats.get("commentsMade")),
        ),
    )


# ── Notifications ────────────────────────────────────────────


def notification_to_dict(notification: NotificationRecord) -> dict[str, Any]:
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "department": notification.department,
        "targetUserId": notification.target_user_id,
        "timestamp": format_iso_datetime(notification.timestamp),
        "isRead": bool(notification.is_read),
    }


def notification_from_dict(document: Mapping[str, Any]) -> NotificationRecord:
    notification_type = _require_str(document, "type")
    if notification_type not in NOTIFICATION_TYPES:
        raise MalformedDocumentError(f"Unknown notification type {notification_type!r}")
    timestamp = parse_iso_datetime(document.get("timestamp"))
    if timestamp is None:
        raise MalformedDocumentError("'timestamp' must be an ISO-8601 string")
    return NotificationRecord(
        id=_require_str(document, "id"),
        title=_require_str(document, "title"),
        message=_require_str(document, "message"),
        type=notification_type,
        timestamp=timestamp,
        department=_optional_str(document, "department"),
        target_user_id=_optional_str(document, "targetUserId") or None,
        is_read=bool(document.get("isRead", False)),
    )


# ── Tasks ────────────────────────────────────────────────────


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "department": task.department,
        "creatorId": task.creator_id,
        "creatorName": task.creator_name,
        "creatorDepartment": task.creator_department,
        "assigneeId": task.assignee_id,
        "assigneeName": task.assignee_name,
        "createdAt": format_iso_datetime(task.created_at),
        "deadline": task.deadline,
        "subTasks": [
            {"id": item.id, "label": item.label, "isDone": item.is_done}
            for item in task.sub_tasks
        ],
    }


def task_from_dict(document: Mapping[str, Any]) -> Task:
    sub_tasks = [
        CheckItem(
            id=str(item.get("id") or ""),
            label=str(item.get("label") or ""),
            is_done=bool(item.get("isDone", False)),
        )
        for item in document.get("subTasks") or []
        if isinstance(item, Mapping)
    ]
    return Task(
        id=_require_str(document, "id"),
        title=_require_str(document, "title"),
        description=str(document.get("description") or ""),
        status=_enum_or_default(TaskStatus, document.get("status"), TaskStatus.TODO),
        department=str(document.get("department") or ""),
        creator_id=str(document.get("creatorId") or ""),
        creator_name=str(document.get("creatorName") or ""),
        creator_department=str(document.get("creatorDepartment") or ""),
        assignee_id=str(document.get("assigneeId") or ""),
        assignee_name=str(document.get("assigneeName") or ""),
        created_at=parse_iso_datetime(document.get("createdAt")),
        deadline=str(document.get("deadline") or ""),
        sub_tasks=sub_tasks,
    )


# ── Issues ───────────────────────────────────────────────────


def _comment_to_dict(comment: IssueComment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "senderId": comment.sender_id,
        "senderName": comment.sender_name,
        "senderAvatar": comment.sender_avatar,
        "text": comment.text,
        "timestamp": comment.timestamp,
    }


def _comment_from_dict(document: Mapping[str, Any]) -> IssueComment:
    return IssueComment(
        id=_require_str(document, "id"),
        sender_id=str(document.get("senderId") or ""),
        sender_name=str(document.get("senderName") or ""),
        sender_avatar=str(document.get("senderAvatar") or ""),
        text=str(document.get("text") or ""),
        timestamp=str(document.get("timestamp") or ""),
    )


def issue_to_dict(issue: Issue) -> dict[str, Any]:
    return {
        "id": issue.id,
        "senderId": issue.sender_id,
        "senderName": issue.sender_name,
        "senderAvatar": issue.sender_avatar,
        "department": issue.department,
        "text": issue.text,
        "severity": issue.severity.value,
        "timestamp": issue.timestamp,
        "comments": [_comment_to_dict(comment) for comment in issue.comments],
    }


def issue_from_dict(document: Mapping[str, Any]) -> Issue:
    comments = [
        _comment_from_dict(item)
        for item in document.get("comments") or []
        if isinstance(item, Mapping) and isinstance(item.get("id"), str)
    ]
    return Issue(
        id=_require_str(document, "id"),
        sender_id=str(document.get("senderId") or ""),
        sender_name=str(document.get("senderName") or ""),
        sender_avatar=str(document.get("senderAvatar") or ""),
        department=str(document.get("department") or ""),
        text=str(document.get("text") or ""),
        severity=_enum_or_default(
            IssueSeverity, document.get("severity"), IssueSeverity.NORMAL
        ),
        timestamp=str(document.get("timestamp") or ""),
        comments=comments,
    )


# ── Collections ──────────────────────────────────────────────

_CODECS: dict[str, tuple[Callable[[Any], dict[str, Any]], Callable[[Mapping[str, Any]], Any]]] = {
    EMPLOYEES_KEY: (employee_to_dict, employee_from_dict),
    TASKS_KEY: (task_to_dict, task_from_dict),
    ISSUES_KEY: (issue_to_dict, issue_from_dict),
    NOTIFICATIONS_KEY: (notification_to_dict, notification_from_dict),
}


def encode_collection(key: str, items: Iterable[Any]) -> list[dict[str, Any]]:
    """Return the JSON-ready documents for the entities stored under ``key``."""

    encoder, _ = _CODECS[key]
    return [encoder(item) for item in items]


def decode_collection(key: str, documents: Iterable[Any]) -> list[Any]:
    """Map stored documents to entities, skipping the ones that are malformed."""

    _, decoder = _CODECS[key]
    entities: list[Any] = []
    for index, document in enumerate(documents):
        if not isinstance(document, Mapping):
            logger.warning("Skipping non-object entry %s of %s", index, key)
            continue
        try:
            entities.append(decoder(document))
        except MalformedDocumentError as exc:
            logger.warning("Skipping malformed entry %s of %s: %s", index, key, exc)
    return entities


def decode_payload(key: str, raw: str | None) -> list[Any]:
    """Parse a serialized collection and map it to entities in one step."""

    return decode_collection(key, parse_collection(raw, key=key))


__all__ = [
    "MalformedDocumentError",
    "decode_collection",
    "decode_payload",
    "employee_from_dict",
    "employee_to_dict",
    "encode_collection",
    "issue_from_dict",
    "issue_to_dict",
    "notification_from_dict",
    "notification_to_dict",
    "parse_collection",
    "task_from_dict",
    "task_to_dict",
]
