"""Domain value describing the presence of the directory."""

from __future__ import annotations

from dataclasses import dataclass, field

from .employee import Employee


@dataclass(frozen=True)
class PresenceSnapshot:
    """Online/offline reduction computed at one instant."""

    online_count: int
    offline_count: int
    online_users: list[Employee] = field(default_factory=list)


__all__ = ["PresenceSnapshot"]
