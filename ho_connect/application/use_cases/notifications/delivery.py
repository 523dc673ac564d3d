"""Receiving half of the cross-instance notification protocol."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ho_connect.application.state import AppState
from ho_connect.config import Settings, get_settings
from ho_connect.domain.entities import NotificationRecord

from .toasts import ToastManager

logger = logging.getLogger(__name__)


class MentionSignalDelivery:
    """Turn ledger snapshots signalled by other instances into toasts.

    Only mentions addressed to the logged-in user qualify, and only the
    newest qualifying record per signal is toasted. The id of the last
    toasted record is remembered so a repeated snapshot does not toast it
    twice. Remote mention toasts live 10 seconds while locally dispatched
    ones live 12; both values come from settings and are kept distinct.
    """

    def __init__(
        self,
        state: AppState,
        toasts: ToastManager,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._state = state
        self._toasts = toasts
        self._settings = settings or get_settings()
        self.last_processed_id: str | None = None

    def receive(self, records: Sequence[NotificationRecord]) -> NotificationRecord | None:
        """Replace the local ledger with ``records`` and toast a new mention.

        Returns the record that was toasted, if any.
        """

        self._state.notifications = list(records)

        user_id = self._state.current_user_id
        if user_id is None:
            return None

        pending = [
            record
            for record in records
            if record.id != self.last_processed_id
            and record.is_mention
            and record.target_user_id == user_id
        ]
        if not pending:
            return None

        latest = pending[0]
        self.last_processed_id = latest.id
        self._toasts.push(latest, self._settings.remote_mention_toast_lifetime_seconds)
        logger.debug("Toasting remote mention %s for %s", latest.id, user_id)
        return latest


__all__ = ["MentionSignalDelivery"]
