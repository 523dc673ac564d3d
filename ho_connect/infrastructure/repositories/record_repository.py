"""Persistence helpers for serialized record collections."""

from __future__ import annotations

from sqlalchemy.orm import Session

from ho_connect.infrastructure.models import RecordModel


class RecordRepository:
    """Provide key-value access to the ``record`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        model = self.session.get(RecordModel, key)
        if model is None:
            return None
        return model.value

    def put(self, key: str, value: str) -> None:
        """Replace the whole value stored under ``key``."""

        model = self.session.get(RecordModel, key)
        if model is None:
            model = RecordModel(key=key)
        model.value = value
        self.session.add(model)
        self.session.commit()


__all__ = ["RecordRepository"]
