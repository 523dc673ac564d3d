"""Content generator backed by the OpenAI Responses API.

The coordination core treats this service as an opaque collaborator: it
asks for project ideas or for a task draft and only relies on the shape of
the answer. Every failure (configuration aside) degrades to an empty list
or ``None``.
"""

from __future__ import annotations

import inspect
import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from openai import OpenAI, OpenAIError

from ho_connect.config import Settings, get_settings
from ho_connect.domain.entities import Employee, ProjectIdea, TaskDraft

logger = logging.getLogger(__name__)

_IDEA_COUNT = 3
_IDEA_FIELDS: tuple[str, ...] = ("title", "description", "objective", "keySteps", "impact")
_TASK_DRAFT_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "department",
    "assigneeId",
    "assigneeName",
    "deadline",
)

_IDEAS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "ideas": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "objective": {"type": "string"},
                    "keySteps": {"type": "array", "items": {"type": "string"}},
                    "impact": {"type": "string"},
                },
                "required": list(_IDEA_FIELDS),
                "additionalProperties": False,
            },
        }
    },
    "required": ["ideas"],
    "additionalProperties": False,
}

_TASK_DRAFT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "department": {"type": "string"},
        "assigneeId": {"type": "string"},
        "assigneeName": {"type": "string"},
        "deadline": {"type": "string", "description": "YYYY-MM-DD"},
        "suggestedSubTasks": {"type": "array", "items": {"type": "string"}},
    },
    "required": [*_TASK_DRAFT_FIELDS, "suggestedSubTasks"],
    "additionalProperties": False,
}


def _strip_code_fences(text: str) -> str:
    """Return JSON text without Markdown code fences."""

    s = text.strip()
    if not s.startswith("```"):
        return text

    # keep only the payload between the first opening bracket and the
    # matching last closing one.
    cleaned = s.strip("`")
    starts = [index for index in (cleaned.find("{"), cleaned.find("[")) if index != -1]
    end = max(cleaned.rfind("}"), cleaned.rfind("]"))
    if not starts or end == -1:
        return text
    return cleaned[min(starts) : end + 1]


def _remove_trailing_commas(text: str) -> str:
    """Remove trailing commas that break strict JSON decoding."""

    return re.sub(r",(\s*[}\]])", r"\1", text)


def _decode_json(text: str) -> Any:
    """Decode model output, tolerating code fences and trailing commas."""

    candidates = (text, _strip_code_fences(text))
    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    try:
        return json.loads(_remove_trailing_commas(_strip_code_fences(text)))
    except json.JSONDecodeError as exc:
        raise ContentGeneratorError("The generator answer is not valid JSON.") from exc


def _accepts_keyword(function: Any, name: str) -> bool:
    try:
        params = inspect.signature(function).parameters
    except (TypeError, ValueError):  # pragma: no cover - exotic SDK builds
        return False
    return name in params or any(
        param.kind is inspect.Parameter.VAR_KEYWORD for param in params.values()
    )


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _build_idea(entry: Any) -> ProjectIdea | None:
    if not isinstance(entry, Mapping):
        return None
    title = entry.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    return ProjectIdea(
        title=title.strip(),
        description=str(entry.get("description") or ""),
        objective=str(entry.get("objective") or ""),
        key_steps=_string_list(entry.get("keySteps")),
        impact=str(entry.get("impact") or ""),
    )


def _build_task_draft(payload: Any) -> TaskDraft | None:
    if not isinstance(payload, Mapping):
        return None
    for field in _TASK_DRAFT_FIELDS:
        if not isinstance(payload.get(field), str):
            return None
    if not payload["title"].strip():
        return None
    return TaskDraft(
        title=payload["title"].strip(),
        description=payload["description"],
        department=payload["department"],
        assignee_id=payload["assigneeId"],
        assignee_name=payload["assigneeName"],
        deadline=payload["deadline"],
        suggested_sub_tasks=_string_list(payload.get("suggestedSubTasks")),
    )


class OpenAIConfigurationError(RuntimeError):
    """Raised when the generator is missing its basic configuration."""


class ContentGeneratorError(RuntimeError):
    """Raised when the OpenAI API does not answer as expected."""


class ContentGeneratorService:
    """Generate project ideas and task drafts from free-form text."""

    def __init__(self, client: Any | None = None, settings: Settings | None = None) -> None:
        settings = settings or get_settings()

        if client is None:
            api_key = (settings.openai_api_key or "").strip()
            if not api_key:
                raise OpenAIConfigurationError(
                    "OPENAI_API_KEY is not defined in the environment.",
                )
            client_kwargs: dict[str, Any] = {"api_key": api_key}
            base_url = (settings.openai_base_url or "").strip()
            if base_url:
                client_kwargs["base_url"] = base_url
            client = OpenAI(**client_kwargs)

        responses_client = getattr(client, "responses", None)
        if responses_client is None:
            raise OpenAIConfigurationError(
                "The installed 'openai' library does not expose the 'responses' API.",
            )

        max_output_tokens = settings.openai_max_output_tokens
        if max_output_tokens is not None and max_output_tokens <= 0:
            max_output_tokens = None

        self._responses = responses_client
        self._supports_text_format = _accepts_keyword(responses_client.create, "text")
        self._model = (settings.openai_model or "gpt-4.1-mini").strip() or "gpt-4.1-mini"
        self._temperature = float(settings.openai_temperature)
        self._max_output_tokens = max_output_tokens

    def generate_project_ideas(
        self, challenge: str, departments: Sequence[str]
    ) -> list[ProjectIdea]:
        """Return cross-department project ideas for ``challenge``.

        An empty list is returned when the model fails or answers with
        something that does not have the expected shape.
        """

        if not challenge or not challenge.strip():
            return []

        instruction = (
            f"Create {_IDEA_COUNT} innovative HR project ideas for a retail company that "
            f"address this challenge: \"{challenge.strip()}\". Focus on coordination "
            f"between these departments: {', '.join(departments)}. "
            "Answer with a JSON object containing an 'ideas' array."
        )
        try:
            payload = self._request_json(instruction, _IDEAS_SCHEMA, "project_ideas")
        except ContentGeneratorError as exc:
            logger.warning("Could not generate project ideas: %s", exc)
            return []

        entries = payload.get("ideas") if isinstance(payload, Mapping) else payload
        if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
            logger.warning("Generator answered ideas with an unexpected shape: %r", payload)
            return []
        return [idea for idea in (_build_idea(entry) for entry in entries) if idea]

    def parse_task_draft(
        self,
        prompt: str,
        employees: Sequence[Employee],
        departments: Sequence[str],
    ) -> TaskDraft | None:
        """Turn a natural language instruction into a :class:`TaskDraft`."""

        if not prompt or not prompt.strip():
            return None

        employee_list = ", ".join(
            f"{employee.name} (ID: {employee.id}, department: {employee.department})"
            for employee in employees
        )
        instruction = (
            f"From this work instruction: \"{prompt.strip()}\" build a task as JSON. "
            f"Employees that can be assigned: {employee_list or 'none'}. "
            f"Departments: {', '.join(departments)}. "
            "If no employee is named, pick the most suitable one for the department "
            "or leave assigneeId empty."
        )
        try:
            payload = self._request_json(instruction, _TASK_DRAFT_SCHEMA, "task_draft")
        except ContentGeneratorError as exc:
            logger.warning("Could not parse a task draft: %s", exc)
            return None

        draft = _build_task_draft(payload)
        if draft is None:
            logger.warning("Generator answered a task draft with an unexpected shape: %r", payload)
        return draft

    def _request_json(
        self, instruction: str, schema: dict[str, Any], schema_name: str
    ) -> Any:
        system_prompt = (
            "You assist the head office of a retail organization. "
            "Always answer with JSON only."
        )
        if not self._supports_text_format:
            system_prompt += (
                " The answer must match this JSON Schema: "
                f"{json.dumps(schema, ensure_ascii=False)}"
            )
        messages = [
            {"role": "system", "content": [{"type": "input_text", "text": system_prompt}]},
            {"role": "user", "content": [{"type": "input_text", "text": instruction}]},
        ]

        request_kwargs: dict[str, Any] = {
            "model": self._model,
            "input": messages,
            "temperature": self._temperature,
        }
        if self._max_output_tokens is not None:
            request_kwargs["max_output_tokens"] = self._max_output_tokens
        if self._supports_text_format:
            request_kwargs["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            }

        try:
            resp = self._responses.create(**request_kwargs)
        except OpenAIError as exc:
            raise ContentGeneratorError(f"The request for {schema_name} failed.") from exc

        text = getattr(resp, "output_text", None)
        if not text:
            try:
                text = resp.output[0].content[0].text
            except (AttributeError, IndexError, TypeError) as exc:
                raise ContentGeneratorError("The generator answer contains no text.") from exc

        logger.debug("Raw generator answer for %s: %s", schema_name, text)
        return _decode_json(text.strip())


__all__ = [
    "ContentGeneratorError",
    "ContentGeneratorService",
    "OpenAIConfigurationError",
]
