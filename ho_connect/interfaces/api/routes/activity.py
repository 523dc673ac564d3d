"""Routes for the mutations that raise notifications: chat, tasks and issues."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ho_connect.application.instance import ClientInstance
from ho_connect.application.use_cases import (
    add_issue_comment as add_issue_comment_uc,
    add_task as add_task_uc,
    convert_issue_to_task as convert_issue_to_task_uc,
    create_issue as create_issue_uc,
    send_chat_message as send_chat_message_uc,
    update_sub_task as update_sub_task_uc,
    update_task_status as update_task_status_uc,
)
from ho_connect.interfaces.api.dependencies import get_instance, get_logged_instance
from ho_connect.interfaces.api.schemas import (
    ChatMessageCreate,
    ChatMessageRead,
    IssueCommentCreate,
    IssueCommentRead,
    IssueCreate,
    IssueRead,
    SubTaskUpdate,
    TaskCreate,
    TaskRead,
    TaskStatusUpdate,
)

router = APIRouter(prefix="/sessions/{session_id}", tags=["activity"])


def _not_found(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _bad_request(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/chat", response_model=list[ChatMessageRead])
async def list_messages(
    room: str | None = None,
    instance: ClientInstance = Depends(get_instance),
) -> list[ChatMessageRead]:
    messages = instance.state.messages
    if room:
        messages = [message for message in messages if message.room == room]
    return [ChatMessageRead.model_validate(message) for message in messages]


@router.post("/chat", response_model=ChatMessageRead, status_code=status.HTTP_201_CREATED)
async def send_chat_message(
    payload: ChatMessageCreate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> ChatMessageRead:
    """Post a message; mentions and private rooms notify their recipients."""

    try:
        message = send_chat_message_uc(
            instance.state,
            instance.store,
            instance.dispatcher,
            room=payload.room,
            text=payload.text,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return ChatMessageRead.model_validate(message)


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(instance: ClientInstance = Depends(get_instance)) -> list[TaskRead]:
    return [TaskRead.model_validate(task) for task in instance.state.tasks]


@router.post("/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> TaskRead:
    try:
        task = add_task_uc(
            instance.state,
            instance.store,
            instance.dispatcher,
            title=payload.title,
            description=payload.description,
            department=payload.department,
            assignee_id=payload.assignee_id,
            assignee_name=payload.assignee_name,
            deadline=payload.deadline,
            status=payload.status,
            sub_task_labels=payload.sub_tasks,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return TaskRead.model_validate(task)


@router.post("/tasks/{task_id}/status", response_model=TaskRead)
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> TaskRead:
    try:
        task = update_task_status_uc(
            instance.state,
            instance.store,
            instance.dispatcher,
            task_id,
            payload.status,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _not_found(exc) from exc
    return TaskRead.model_validate(task)


@router.patch("/tasks/{task_id}/sub-tasks/{sub_task_id}", response_model=TaskRead)
async def update_sub_task(
    task_id: str,
    sub_task_id: str,
    payload: SubTaskUpdate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> TaskRead:
    try:
        task = update_sub_task_uc(
            instance.state,
            instance.store,
            task_id,
            sub_task_id,
            payload.is_done,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _not_found(exc) from exc
    return TaskRead.model_validate(task)


@router.get("/issues", response_model=list[IssueRead])
async def list_issues(instance: ClientInstance = Depends(get_instance)) -> list[IssueRead]:
    return [IssueRead.model_validate(issue) for issue in instance.state.issues]


@router.post("/issues", response_model=IssueRead, status_code=status.HTTP_201_CREATED)
async def create_issue(
    payload: IssueCreate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> IssueRead:
    try:
        issue = create_issue_uc(
            instance.state,
            instance.store,
            department=payload.department,
            text=payload.text,
            severity=payload.severity,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return IssueRead.model_validate(issue)


@router.post(
    "/issues/{issue_id}/comments",
    response_model=IssueCommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def comment_issue(
    issue_id: str,
    payload: IssueCommentCreate,
    instance: ClientInstance = Depends(get_logged_instance),
) -> IssueCommentRead:
    if instance.state.find_issue(issue_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found")
    try:
        comment = add_issue_comment_uc(
            instance.state,
            instance.store,
            instance.dispatcher,
            issue_id,
            text=payload.text,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return IssueCommentRead.model_validate(comment)


@router.post("/issues/{issue_id}/task", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def convert_issue(
    issue_id: str,
    instance: ClientInstance = Depends(get_logged_instance),
) -> TaskRead:
    """Open a fix task for the department the issue was reported to."""

    try:
        task = convert_issue_to_task_uc(
            instance.state,
            instance.store,
            instance.dispatcher,
            issue_id,
            origin=instance.id,
        )
    except ValueError as exc:
        raise _not_found(exc) from exc
    return TaskRead.model_validate(task)
