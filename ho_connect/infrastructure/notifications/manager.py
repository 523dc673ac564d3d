"""Connection management helpers for instance websockets."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class InstanceConnectionManager:
    """Manage active websocket connections grouped by instance."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        """Event loop that accepted the most recent connection."""

        return self._loop

    async def connect(self, instance_id: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``instance_id``."""

        await websocket.accept()
        self._loop = asyncio.get_running_loop()
        self._connections[instance_id].add(websocket)

    def disconnect(self, instance_id: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``instance_id``."""

        connections = self._connections.get(instance_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(instance_id, None)

    def connection_count(self, instance_id: str) -> int:
        return len(self._connections.get(instance_id, ()))

    async def send_to_instance(self, instance_id: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``instance_id``."""

        connections = list(self._connections.get(instance_id, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception:  # pragma: no cover - connection already gone
                logger.info("Dropping websocket of instance %s after a failed send", instance_id)
                self.disconnect(instance_id, connection)


instance_manager = InstanceConnectionManager()


__all__ = ["InstanceConnectionManager", "instance_manager"]
