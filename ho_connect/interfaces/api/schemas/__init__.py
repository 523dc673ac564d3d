from .activity import (
    ChatMessageCreate,
    ChatMessageRead,
    CheckItemRead,
    IssueCommentCreate,
    IssueCommentRead,
    IssueCreate,
    IssueRead,
    SubTaskUpdate,
    TaskCreate,
    TaskRead,
    TaskStatusUpdate,
)
from .assistant import (
    ProjectIdeaRead,
    ProjectIdeasRequest,
    TaskDraftRead,
    TaskDraftRequest,
)
from .employee import ActivityStatsRead, EmployeeCreate, EmployeeRead
from .notification import (
    NotificationBulkResult,
    NotificationLedgerRead,
    NotificationRead,
    ToastRead,
)
from .presence import PresenceRead
from .session import SessionCreate, SessionRead

__all__ = [
    "ActivityStatsRead",
    "ChatMessageCreate",
    "ChatMessageRead",
    "CheckItemRead",
    "EmployeeCreate",
    "EmployeeRead",
    "IssueCommentCreate",
    "IssueCommentRead",
    "IssueCreate",
    "IssueRead",
    "NotificationBulkResult",
    "NotificationLedgerRead",
    "NotificationRead",
    "PresenceRead",
    "ProjectIdeaRead",
    "ProjectIdeasRequest",
    "SessionCreate",
    "SessionRead",
    "SubTaskUpdate",
    "TaskCreate",
    "TaskDraftRead",
    "TaskDraftRequest",
    "TaskRead",
    "TaskStatusUpdate",
    "ToastRead",
]
