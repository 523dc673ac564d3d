"""Domain entities for issues reported to a department."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IssueSeverity(str, Enum):
    NORMAL = "normal"
    MEDIUM = "medium"
    URGENT = "urgent"


@dataclass
class IssueComment:
    """Reply posted under an issue."""

    id: str
    sender_id: str
    sender_name: str
    sender_avatar: str
    text: str
    timestamp: str


@dataclass
class Issue:
    """Problem report addressed to a department."""

    id: str
    sender_id: str
    sender_name: str
    sender_avatar: str
    department: str
    text: str
    severity: IssueSeverity
    timestamp: str
    comments: list[IssueComment] = field(default_factory=list)


__all__ = ["Issue", "IssueComment", "IssueSeverity"]
