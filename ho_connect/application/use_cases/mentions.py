"""Extract ``@name`` mentions from free text and resolve them to employees."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Final

from ho_connect.domain.entities import Employee

# Word characters, Thai letters and spaces after an ``@``.
MENTION_PATTERN: Final[re.Pattern[str]] = re.compile(r"@([\w\u0E00-\u0E7F ]+)")


def extract_mentions(text: str) -> list[str]:
    """Return the trimmed candidate names in order of appearance."""

    if not text:
        return []
    candidates = (match.group(1).strip() for match in MENTION_PATTERN.finditer(text))
    return [candidate for candidate in candidates if candidate]


def _name_prefixes(candidate: str) -> Iterable[str]:
    # "Somchai please review" -> "Somchai please review", "Somchai please", "Somchai"
    words = candidate.split()
    for size in range(len(words), 0, -1):
        yield " ".join(words[:size])


def _find_by_name(name: str, employees: Sequence[Employee]) -> Employee | None:
    return next((employee for employee in employees if employee.name == name), None)


def resolve_mention(candidate: str, employees: Sequence[Employee]) -> Employee | None:
    """Return the employee whose display name equals ``candidate``.

    The pattern also captures the words that follow a name, so when the
    whole candidate matches nobody the longest leading run of words that
    equals a display name is used instead. Matching is exact and
    case-sensitive and the first employee in directory order wins.
    """

    for name in _name_prefixes(candidate):
        employee = _find_by_name(name, employees)
        if employee is not None:
            return employee
    return None


def resolve_mentions(
    text: str,
    employees: Sequence[Employee],
    *,
    acting_user_id: str | None = None,
) -> list[Employee]:
    """Return the employees mentioned in ``text`` except the acting user.

    Unknown names are dropped and every employee appears at most once.
    """

    resolved: list[Employee] = []
    seen: set[str] = set()
    for candidate in extract_mentions(text):
        employee = resolve_mention(candidate, employees)
        if employee is None or employee.id == acting_user_id or employee.id in seen:
            continue
        seen.add(employee.id)
        resolved.append(employee)
    return resolved


__all__ = ["MENTION_PATTERN", "extract_mentions", "resolve_mention", "resolve_mentions"]
