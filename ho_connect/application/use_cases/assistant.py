"""Use cases delegating to the content generator."""

from __future__ import annotations

from ho_connect.application.state import AppState
from ho_connect.domain.entities import ProjectIdea, TaskDraft
from ho_connect.infrastructure.openai_client import ContentGeneratorService


def generate_project_ideas(
    generator: ContentGeneratorService, state: AppState, challenge: str
) -> list[ProjectIdea]:
    """Ask for project ideas involving every known department."""

    return generator.generate_project_ideas(challenge, state.available_departments())


def draft_task(
    generator: ContentGeneratorService, state: AppState, prompt: str
) -> TaskDraft | None:
    """Turn a work instruction into a task draft.

    A draft naming an employee that is not in the directory keeps its
    department but loses the assignee.
    """

    draft = generator.parse_task_draft(
        prompt, state.employees, state.available_departments()
    )
    if draft is None or not draft.assignee_id:
        return draft

    assignee = state.find_employee(draft.assignee_id)
    if assignee is None:
        draft.assignee_id = ""
        draft.assignee_name = ""
    else:
        draft.assignee_name = assignee.name
    return draft


__all__ = ["draft_task", "generate_project_ideas"]
