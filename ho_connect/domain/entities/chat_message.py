"""Domain entity representing a chat message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

GLOBAL_ROOM: Final[str] = "GLOBAL"
DIRECT_ROOM_PREFIX: Final[str] = "DM:"
DIRECT_ROOM_SEPARATOR: Final[str] = "--"


@dataclass
class ChatMessage:
    """Message posted in a room of the coordination chat."""

    id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: str
    room: str

    @property
    def is_direct(self) -> bool:
        return self.room.startswith(DIRECT_ROOM_PREFIX)


def direct_room_id(first_user_id: str, second_user_id: str) -> str:
    """Return the room identifier of the private chat between two employees."""

    ordered = sorted((first_user_id, second_user_id))
    return f"{DIRECT_ROOM_PREFIX}{ordered[0]}{DIRECT_ROOM_SEPARATOR}{ordered[1]}"


def direct_room_members(room: str) -> list[str]:
    """Return the employee ids taking part in a private room."""

    if not room.startswith(DIRECT_ROOM_PREFIX):
        return []
    return [
        member
        for member in room[len(DIRECT_ROOM_PREFIX) :].split(DIRECT_ROOM_SEPARATOR)
        if member
    ]


__all__ = [
    "ChatMessage",
    "DIRECT_ROOM_PREFIX",
    "DIRECT_ROOM_SEPARATOR",
    "GLOBAL_ROOM",
    "direct_room_id",
    "direct_room_members",
]
