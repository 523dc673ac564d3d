"""Routes delegating to the content generator."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ho_connect.application.instance import ClientInstance
from ho_connect.application.state import AppState
from ho_connect.application.use_cases import (
    draft_task as draft_task_uc,
    generate_project_ideas as generate_project_ideas_uc,
)
from ho_connect.infrastructure.openai_client import ContentGeneratorService
from ho_connect.interfaces.api.dependencies import (
    get_content_generator,
    get_directory_state,
    get_instance,
)
from ho_connect.interfaces.api.schemas import (
    ProjectIdeaRead,
    ProjectIdeasRequest,
    TaskDraftRead,
    TaskDraftRequest,
)

router = APIRouter(tags=["assistant"])


@router.post("/assistant/ideas", response_model=list[ProjectIdeaRead])
def generate_project_ideas(
    payload: ProjectIdeasRequest,
    state: AppState = Depends(get_directory_state),
    generator: ContentGeneratorService = Depends(get_content_generator),
) -> list[ProjectIdeaRead]:
    """Suggest cross-department projects; an empty list when the model fails."""

    ideas = generate_project_ideas_uc(generator, state, payload.challenge)
    return [ProjectIdeaRead.model_validate(idea) for idea in ideas]


@router.post("/sessions/{session_id}/assistant/task-draft", response_model=TaskDraftRead)
def draft_task(
    payload: TaskDraftRequest,
    instance: ClientInstance = Depends(get_instance),
    generator: ContentGeneratorService = Depends(get_content_generator),
) -> TaskDraftRead:
    draft = draft_task_uc(generator, instance.state, payload.prompt)
    if draft is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="The instruction could not be turned into a task",
        )
    return TaskDraftRead.model_validate(draft)
